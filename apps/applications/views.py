from rest_framework import generics,permissions,status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.projects.serializers import ProjectDetailSerializer
from .models import Proposal
from .permissions import IsFreelancer
from .serializers import (
    MyProposalSerializer,
    ProposalDecisionSerializer,
    ProposalSerializer,
    ProposalSubmitSerializer,
)
from .services.proposal_lifecycle import accept_proposal, reject_proposal, submit_proposal


class ProposalSubmitView(APIView):
    '''
    Allow a freelancer to bid on an open project
    '''
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, project_id):
        serializer = ProposalSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        proposal = submit_proposal(
            project_id,
            request.user.id,
            **serializer.validated_data,
        )
        return Response(
            ProposalSerializer(proposal).data,
            status=status.HTTP_201_CREATED
        )


class ProposalDecisionView(APIView):
    '''
    Project owner accepts or rejects one proposal.
    Accepting assigns the project and rejects every other pending proposal.
    '''
    permission_classes = [permissions.IsAuthenticated]

    def put(self, request, project_id, proposal_id):
        serializer = ProposalDecisionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if serializer.validated_data['action'] == 'accept':
            project = accept_proposal(project_id, proposal_id, request.user.id)
            return Response(
                ProjectDetailSerializer(project, context={'request': request}).data
            )

        proposal = reject_proposal(project_id, proposal_id, request.user.id)
        return Response(ProposalSerializer(proposal).data)


class MyProposals(generics.ListAPIView):
    serializer_class = MyProposalSerializer
    permission_classes = [IsFreelancer]
    filterset_fields = ['status']

    def get_queryset(self):
        return (
            Proposal.objects
            .select_related('project', 'project__client')
            .filter(freelancer=self.request.user)
            .order_by('-created_at', '-id')
        )
