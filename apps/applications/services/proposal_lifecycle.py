"""
Proposal lifecycle on the Project aggregate.

A project owns its proposals; every operation here reads the project row
under ``select_for_update`` and commits through ``Project.objects.claim``,
a compare-and-swap on ``Project.version``. The row lock serializes writers
on backends that support it; the version check keeps the aggregate
consistent on backends that don't (a lost race is detected, never
silently overwritten).

Proposal states are one-way::

    pending --accept--> accepted
    pending --reject--> rejected
    pending --sibling accepted--> rejected
"""
import logging

from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.applications.models import Proposal
from apps.applications.tasks import send_proposal_accepted_email
from apps.cores.exceptions import InvalidState, ResourceNotFound, StateConflict
from apps.notifications.services.create_notifications import notify_user
from apps.projects.models import Project
from apps.projects.services import ensure_owner, get_project, load_project
from apps.users.identity import require_role
from apps.users.models import Role

logger = logging.getLogger(__name__)

MAX_ACCEPT_ATTEMPTS = 3


def submit_proposal(project_id, freelancer_id, bid, timeline, proposal_text):
    require_role(freelancer_id, Role.FREELANCER)

    with transaction.atomic():
        project = load_project(project_id, for_update=True)

        if not project.is_open:
            raise InvalidState("This project is not accepting proposals.")

        if project.proposals.filter(freelancer_id=freelancer_id).exists():
            raise StateConflict("You have already submitted a proposal for this project.")

        if not Project.objects.claim(project):
            raise StateConflict("Project changed while submitting; try again.")

        try:
            with transaction.atomic():
                proposal = Proposal.objects.create(
                    project=project,
                    freelancer_id=freelancer_id,
                    bid=bid,
                    timeline=timeline,
                    proposal_text=proposal_text,
                )
        except IntegrityError:
            raise StateConflict("You have already submitted a proposal for this project.")

        transaction.on_commit(lambda: _announce_submission(proposal.pk))

    logger.info("Proposal %s submitted to project %s by %s", proposal.pk, project_id, freelancer_id)
    return proposal


def accept_proposal(project_id, proposal_id, acting_client_id):
    require_role(acting_client_id, Role.CLIENT)

    for attempt in range(1, MAX_ACCEPT_ATTEMPTS + 1):
        with transaction.atomic():
            project = load_project(project_id, for_update=True)
            proposal = _resolvable_proposal(project, proposal_id, acting_client_id)

            rejected_ids = _commit_acceptance(project, proposal)
            if rejected_ids is not None:
                transaction.on_commit(lambda: _announce_acceptance(proposal.pk, rejected_ids))
                break

        logger.warning(
            "Accepting proposal %s on project %s lost a concurrent write (attempt %s/%s)",
            proposal_id, project_id, attempt, MAX_ACCEPT_ATTEMPTS,
        )
    else:
        raise StateConflict("Project is being modified concurrently; try again.")

    logger.info(
        "Proposal %s accepted on project %s; %s sibling(s) rejected",
        proposal_id, project_id, len(rejected_ids),
    )
    return get_project(project_id)


def assign_project(project_id, proposal_id, freelancer_id, acting_client_id):
    """
    Assign the project to the freelancer behind ``proposal_id``. The pair
    must match; the assignment itself is an accept.
    """
    project = load_project(project_id)
    ensure_owner(project, acting_client_id)

    if not project.proposals.filter(pk=proposal_id, freelancer_id=freelancer_id).exists():
        raise ResourceNotFound("This freelancer has no such proposal on the project.")

    return accept_proposal(project_id, proposal_id, acting_client_id)


def reject_proposal(project_id, proposal_id, acting_client_id):
    require_role(acting_client_id, Role.CLIENT)

    with transaction.atomic():
        project = load_project(project_id, for_update=True)
        proposal = _resolvable_proposal(project, proposal_id, acting_client_id)

        if not Project.objects.claim(project):
            raise StateConflict("Project changed while rejecting; try again.")

        _transition(proposal, Proposal.Status.REJECTED)
        transaction.on_commit(lambda: _announce_rejections([proposal.pk]))

    logger.info("Proposal %s rejected on project %s", proposal_id, project_id)
    proposal.refresh_from_db()
    return proposal


def _resolvable_proposal(project, proposal_id, actor_id):
    """Preconditions shared by accept and reject."""
    ensure_owner(project, actor_id)

    try:
        proposal = project.proposals.get(pk=proposal_id)
    except Proposal.DoesNotExist:
        raise ResourceNotFound("Proposal not found.")

    if not proposal.is_pending:
        raise InvalidState(f"Proposal has already been {proposal.status}.")

    if not project.is_open:
        raise InvalidState("Proposals can only be resolved while the project is open.")

    return proposal


def _commit_acceptance(project, proposal):
    """
    Returns the ids of the auto-rejected siblings, or None when the
    project version moved since it was read.
    """
    sibling_ids = list(
        project.proposals
        .filter(status=Proposal.Status.PENDING)
        .exclude(pk=proposal.pk)
        .values_list("id", flat=True)
    )

    claimed = Project.objects.claim(
        project,
        status=Project.Status.IN_PROGRESS,
        assigned_to_id=proposal.freelancer_id,
    )
    if not claimed:
        return None

    _transition(proposal, Proposal.Status.ACCEPTED)
    Proposal.objects.filter(pk__in=sibling_ids, status=Proposal.Status.PENDING).update(
        status=Proposal.Status.REJECTED,
        updated_at=timezone.now(),
    )
    return sibling_ids


def _transition(proposal, new_status):
    # pending is the only state a proposal ever leaves
    updated = Proposal.objects.filter(pk=proposal.pk, status=Proposal.Status.PENDING).update(
        status=new_status,
        updated_at=timezone.now(),
    )
    if not updated:
        raise StateConflict("Proposal was resolved concurrently.")


def _announce_submission(proposal_id):
    proposal = Proposal.objects.select_related("project__client", "freelancer").get(pk=proposal_id)
    notify_user(
        proposal.project.client,
        "PROPOSAL_SUBMITTED",
        "New proposal received",
        message=f"{proposal.freelancer.username} bid {proposal.bid} on \"{proposal.project.title}\".",
        data={"project_id": proposal.project_id, "proposal_id": proposal.id},
    )


def _announce_acceptance(proposal_id, rejected_ids):
    proposal = Proposal.objects.select_related("project", "freelancer").get(pk=proposal_id)
    notify_user(
        proposal.freelancer,
        "PROPOSAL_ACCEPTED",
        "Proposal accepted",
        message=f"Your proposal for \"{proposal.project.title}\" was accepted.",
        data={"project_id": proposal.project_id, "proposal_id": proposal.id},
    )
    _announce_rejections(rejected_ids)
    send_proposal_accepted_email.delay(proposal.id)


def _announce_rejections(proposal_ids):
    for proposal in Proposal.objects.select_related("project", "freelancer").filter(pk__in=proposal_ids):
        notify_user(
            proposal.freelancer,
            "PROPOSAL_REJECTED",
            "Proposal not selected",
            message=f"Your proposal for \"{proposal.project.title}\" was not selected.",
            data={"project_id": proposal.project_id, "proposal_id": proposal.id},
        )
