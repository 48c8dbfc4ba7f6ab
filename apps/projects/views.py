from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.applications.permissions import IsClient
from apps.applications.serializers import ProjectAssignSerializer
from apps.applications.services.proposal_lifecycle import assign_project
from .filters import ProjectFilter
from .models import Project
from .serializers import ProjectDetailSerializer, ProjectSerializer
from .services import cancel_project, complete_project, delete_project, ensure_owner, get_project


class ProjectViewSet(viewsets.ModelViewSet):
    serializer_class = ProjectSerializer
    lookup_value_regex = r"\d+"

    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_class = ProjectFilter
    search_fields = ["title", "description", "skills_required__name"]
    ordering_fields = ["created_at", "budget_min", "budget_max"]

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [permissions.AllowAny()]
        if self.action == "create":
            return [IsClient()]
        return [permissions.IsAuthenticated()]

    def get_queryset(self):
        qs = (
            Project.objects
            .select_related("client", "assigned_to")
            .prefetch_related("skills_required")
        )
        # public listing shows open projects unless a status is asked for
        if self.action == "list" and "status" not in self.request.query_params:
            qs = qs.filter(status=Project.Status.OPEN)
        return qs

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ProjectDetailSerializer
        return ProjectSerializer

    def retrieve(self, request, pk=None):
        project = get_project(pk)
        serializer = self.get_serializer(project)
        return Response(serializer.data)

    def update(self, request, pk=None, *args, **kwargs):
        project = get_project(pk)
        ensure_owner(project, request.user.id)
        partial = kwargs.pop('partial', False)

        serializer = self.get_serializer(project, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        return Response(serializer.data)

    def partial_update(self, request, pk=None, *args, **kwargs):
        kwargs["partial"] = True
        return self.update(request, pk, *args, **kwargs)

    def destroy(self, request, pk=None, *args, **kwargs):
        delete_project(pk, request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=["get"])
    def mine(self, request):
        """Client: projects they own. Freelancer: projects assigned to them."""
        qs = (
            Project.objects
            .visible_to(request.user)
            .select_related("client", "assigned_to")
            .prefetch_related("skills_required")
        )
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        project = cancel_project(pk, request.user.id)
        return Response(ProjectDetailSerializer(project, context={"request": request}).data)

    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        project = complete_project(pk, acting_client_id=request.user.id)
        return Response(ProjectDetailSerializer(project, context={"request": request}).data)

    @action(detail=True, methods=["patch"])
    def assign(self, request, pk=None):
        serializer = ProjectAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = assign_project(
            pk,
            serializer.validated_data["proposal_id"],
            serializer.validated_data["freelancer_id"],
            request.user.id,
        )
        return Response(ProjectDetailSerializer(project, context={"request": request}).data)
