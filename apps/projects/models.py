from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Skill(models.Model):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class ProjectQuerySet(models.QuerySet):

    def claim(self, project, **changes):
        """
        Write ``changes`` only if ``project`` still carries the version it was
        read at, bumping the version in the same UPDATE.
        Returns False when another mutation committed in between.
        """
        updated = self.filter(pk=project.pk, version=project.version).update(
            version=F("version") + 1,
            updated_at=timezone.now(),
            **changes,
        )
        return updated == 1

    def visible_to(self, user):
        if user.is_freelancer:
            return self.filter(assigned_to=user)
        return self.filter(client=user)


class Project(models.Model):

    class Status(models.TextChoices):
        OPEN = "open", "Open"
        IN_PROGRESS = "in_progress", "In Progress"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    class Category(models.TextChoices):
        WEB_DEVELOPMENT = "web_development", "Web Development"
        UI_UX_DESIGN = "ui_ux_design", "UI/UX Design"
        DIGITAL_MARKETING = "digital_marketing", "Digital Marketing"
        COPYWRITING = "copywriting", "Copywriting"
        TRANSLATION = "translation", "Translation"
        CONSULTING = "consulting", "Consulting"
        OTHER = "other", "Other"

    client = models.ForeignKey(User, on_delete=models.CASCADE, related_name="projects")

    title = models.CharField(max_length=255)
    description = models.TextField()

    category = models.CharField(max_length=30, choices=Category.choices)
    skills_required = models.ManyToManyField(Skill, related_name="projects", blank=True)

    budget_min = models.DecimalField(max_digits=12, decimal_places=2)
    budget_max = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default="BRL")

    timeline = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.OPEN)

    assigned_to = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="assigned_projects",
    )

    # bumped by every aggregate mutation, see ProjectQuerySet.claim
    version = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProjectQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "-created_at"], name="project_status_created_idx"),
            models.Index(fields=["category"], name="project_category_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(status="in_progress") | Q(assigned_to__isnull=False),
                name="project_in_progress_has_assignee",
            ),
        ]

    def clean(self):
        if self.budget_min is None or self.budget_max is None:
            raise ValidationError("Budget min and max are required.")
        if self.budget_min <= 0 or self.budget_max <= 0:
            raise ValidationError("Budget values must be positive.")
        if self.budget_min > self.budget_max:
            raise ValidationError("Budget min cannot exceed budget max.")

    @property
    def is_open(self):
        return self.status == self.Status.OPEN

    def __str__(self):
        return f"Project: {self.title} ({self.status})"
