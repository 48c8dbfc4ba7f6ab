from rest_framework import serializers

from apps.projects.models import Project
from apps.users.models import User
from .models import Proposal


# ---------------- User Info ----------------
class UserMiniSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'username', 'first_name', 'last_name', 'role']


# ---------------- Proposal (as shown inside a project) ----------------
class ProposalSerializer(serializers.ModelSerializer):
    freelancer = UserMiniSerializer(read_only=True)
    within_budget = serializers.BooleanField(read_only=True)

    class Meta:
        model = Proposal
        fields = [
            'id',
            'freelancer',
            'proposal_text',
            'bid',
            'timeline',
            'status',
            'within_budget',
            'created_at',
        ]
        read_only_fields = fields


# ---------------- Proposal Submit ----------------
class ProposalSubmitSerializer(serializers.Serializer):
    proposal_text = serializers.CharField()
    bid = serializers.DecimalField(max_digits=12, decimal_places=2)
    timeline = serializers.CharField(max_length=100)

    def validate_proposal_text(self, value):
        if not value.strip():
            raise serializers.ValidationError("Proposal cannot be empty.")
        if len(value) > 5000:
            raise serializers.ValidationError("Proposal cannot exceed 5000 characters.")
        if "<script>" in value.lower():
            raise serializers.ValidationError("Invalid content in proposal.")
        return value.strip()

    def validate_bid(self, value):
        if value <= 0:
            raise serializers.ValidationError("Bid must be a positive amount.")
        return value

    def validate_timeline(self, value):
        if not value.strip():
            raise serializers.ValidationError("Timeline is required.")
        return value.strip()


# ---------------- Accept / Reject ----------------
class ProposalDecisionSerializer(serializers.Serializer):
    ACTIONS = ('accept', 'reject')

    action = serializers.ChoiceField(
        choices=ACTIONS,
        error_messages={'invalid_choice': 'Invalid action. Use "accept" or "reject".'},
    )


class ProjectAssignSerializer(serializers.Serializer):
    proposalId = serializers.IntegerField(source='proposal_id', min_value=1)
    freelancerId = serializers.IntegerField(source='freelancer_id', min_value=1)


# ---------------- My Proposals ----------------
class ProposalProjectSerializer(serializers.ModelSerializer):
    client = UserMiniSerializer(read_only=True)

    class Meta:
        model = Project
        fields = [
            'id',
            'title',
            'description',
            'category',
            'budget_min',
            'budget_max',
            'currency',
            'status',
            'client',
        ]


class MyProposalSerializer(serializers.ModelSerializer):
    project = ProposalProjectSerializer(read_only=True)

    class Meta:
        model = Proposal
        fields = [
            'id',
            'status',
            'proposal_text',
            'bid',
            'timeline',
            'created_at',
            'project',
        ]
