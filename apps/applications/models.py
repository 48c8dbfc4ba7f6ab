from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from apps.projects.models import Project


class Proposal(models.Model):

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name="proposals"
    )

    freelancer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="proposals"
    )

    proposal_text = models.TextField()
    bid = models.DecimalField(max_digits=12, decimal_places=2)
    timeline = models.CharField(max_length=100)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('project', 'freelancer')
        # submission order
        ordering = ['created_at', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['project'],
                condition=Q(status='accepted'),
                name='one_accepted_proposal_per_project',
            ),
        ]

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING

    @property
    def within_budget(self):
        project = self.project
        return project.budget_min <= self.bid <= project.budget_max

    def __str__(self):
        return f"{self.freelancer.username} → {self.project.title} ({self.status})"
