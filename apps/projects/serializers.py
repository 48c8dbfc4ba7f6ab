from rest_framework import serializers

from apps.applications.serializers import ProposalSerializer, UserMiniSerializer
from .models import Project, Skill


class SkillSerializer(serializers.ModelSerializer):
    class Meta:
        model = Skill
        fields = ['id', 'name']


class ProjectSerializer(serializers.ModelSerializer):
    """
    Create / update / list representation. Lifecycle fields (status,
    assigned_to, client) are read-only; they only move through the
    lifecycle services.
    """
    skills = serializers.ListField(
        child=serializers.CharField(max_length=100),
        write_only=True,
        required=False,
    )
    skills_required = SkillSerializer(many=True, read_only=True)
    client = UserMiniSerializer(read_only=True)
    assigned_to = UserMiniSerializer(read_only=True)
    proposal_count = serializers.SerializerMethodField()

    EDITABLE_FIELDS = [
        "title",
        "description",
        "category",
        "budget_min",
        "budget_max",
        "currency",
        "timeline",
    ]

    class Meta:
        model = Project
        fields = [
            "id",
            "title",
            "description",
            "category",
            "skills",
            "skills_required",
            "budget_min",
            "budget_max",
            "currency",
            "timeline",
            "status",
            "client",
            "assigned_to",
            "proposal_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "status", "created_at", "updated_at"]

    def get_proposal_count(self, obj):
        return obj.proposals.count()

    # ------------------- VALIDATIONS ------------------- #

    def validate_title(self, value):
        if not value.strip():
            raise serializers.ValidationError("Title is required.")
        return value.strip()

    def validate_description(self, value):
        if not value.strip():
            raise serializers.ValidationError("Description is required.")
        return value

    def validate_timeline(self, value):
        if not value.strip():
            raise serializers.ValidationError("Timeline is required.")
        return value.strip()

    def validate(self, attrs):
        budget_min = attrs.get("budget_min", getattr(self.instance, "budget_min", None))
        budget_max = attrs.get("budget_max", getattr(self.instance, "budget_max", None))

        if budget_min is None or budget_max is None:
            raise serializers.ValidationError("Budget min and max are required.")
        if budget_min <= 0 or budget_max <= 0:
            raise serializers.ValidationError("Budget values must be positive.")
        if budget_min > budget_max:
            raise serializers.ValidationError("Budget min cannot exceed budget max.")

        return attrs

    # ------------------- CREATE / UPDATE ------------------- #

    def _resolve_skills(self, names):
        return [Skill.objects.get_or_create(name=name.strip())[0] for name in names if name.strip()]

    def create(self, validated_data):
        skill_names = validated_data.pop("skills", [])
        project = Project.objects.create(
            client=self.context["request"].user,
            **validated_data,
        )
        project.skills_required.set(self._resolve_skills(skill_names))
        return project

    def update(self, instance, validated_data):
        skill_names = validated_data.pop("skills", None)

        changed = []
        for field in self.EDITABLE_FIELDS:
            if field in validated_data:
                setattr(instance, field, validated_data[field])
                changed.append(field)

        # never write status / assignment columns from here
        if changed:
            instance.save(update_fields=changed + ["updated_at"])

        if skill_names is not None:
            instance.skills_required.set(self._resolve_skills(skill_names))
        return instance


class ProjectDetailSerializer(ProjectSerializer):
    proposals = ProposalSerializer(many=True, read_only=True)
    already_applied = serializers.SerializerMethodField()

    class Meta(ProjectSerializer.Meta):
        fields = ProjectSerializer.Meta.fields + ["proposals", "already_applied"]

    def get_already_applied(self, obj):
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if user is not None and user.is_authenticated:
            return any(p.freelancer_id == user.id for p in obj.proposals.all())
        return False
