import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

from apps.applications.models import Proposal

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    autoretry_for=(Exception,),
    retry_backoff=10,
    retry_kwargs={"max_retries": 3},
)
def send_proposal_accepted_email(self, proposal_id):
    """
    Tell the freelancer their proposal won the project.
    """
    try:
        proposal = (
            Proposal.objects
            .select_related("project", "project__client", "freelancer")
            .get(id=proposal_id)
        )
    except Proposal.DoesNotExist:
        logger.warning("Proposal %s vanished before the acceptance email was sent", proposal_id)
        return

    if proposal.status != Proposal.Status.ACCEPTED:
        return

    freelancer = proposal.freelancer
    client = proposal.project.client
    project = proposal.project

    subject = f"Proposal Accepted · {project.title}"
    message = (
        f"Hi {freelancer.get_full_name() or freelancer.username},\n\n"
        f"{client.get_full_name() or client.username} accepted your proposal for "
        f"\"{project.title}\" (bid {proposal.bid} {project.currency}, timeline {proposal.timeline}).\n\n"
        f"Project page: {settings.SITE_URL}/projects/{project.id}/"
    )

    send_mail(subject, message, settings.DEFAULT_FROM_EMAIL, [freelancer.email])
