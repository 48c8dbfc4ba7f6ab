from django.urls import path
from .views import MyProposals, ProposalDecisionView, ProposalSubmitView

urlpatterns = [
    path('projects/<int:project_id>/proposals/', ProposalSubmitView.as_view(), name='proposal-submit'),
    path(
        'projects/<int:project_id>/proposals/<int:proposal_id>/',
        ProposalDecisionView.as_view(),
        name='proposal-decision',
    ),
    path('my-proposals/', MyProposals.as_view(), name='my-proposals'),
]
