from django.db import models
from django.conf import settings



class Notification(models.Model):
    """
    Universal notification model for Client, Freelancer, Admin.
    """

    NOTIFICATION_TYPES = [
        ("PROPOSAL_SUBMITTED", "Proposal Submitted"),
        ("PROPOSAL_ACCEPTED", "Proposal Accepted"),
        ("PROPOSAL_REJECTED", "Proposal Rejected"),
        ("PROJECT_CANCELLED", "Project Cancelled"),
        ("PROJECT_COMPLETED", "Project Completed"),
        ("SYSTEM", "System Notification"),
    ]

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications"
    )

    notif_type = models.CharField(
        max_length=50,
        choices=NOTIFICATION_TYPES
    )

    title = models.CharField(max_length=255)

    message = models.TextField(blank=True)

    # Optional metadata (store IDs like project_id, proposal_id)
    data = models.JSONField(default=dict, blank=True)

    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Notification({self.recipient.username}, {self.notif_type})"
