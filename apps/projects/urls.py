from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import ProjectViewSet

project_router = DefaultRouter()
project_router.register("projects", ProjectViewSet, basename="projects")

urlpatterns = [
    path('', include(project_router.urls)),
]
