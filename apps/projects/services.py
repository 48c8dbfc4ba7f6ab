import logging

from django.db import transaction

from apps.cores.exceptions import ActionForbidden, InvalidState, ResourceNotFound, StateConflict
from apps.notifications.services.create_notifications import notify_user

from .models import Project

logger = logging.getLogger(__name__)

CANCELLABLE = (Project.Status.OPEN, Project.Status.IN_PROGRESS)


def load_project(project_id, for_update=False):
    qs = Project.objects.all()
    if for_update:
        qs = qs.select_for_update()
    try:
        return qs.get(pk=project_id)
    except Project.DoesNotExist:
        raise ResourceNotFound("Project not found.")


def ensure_owner(project, actor_id):
    if project.client_id != actor_id:
        raise ActionForbidden("Only the project owner can manage this project.")


def get_project(project_id):
    """Project with its client, assignee and full proposal list, for display."""
    try:
        return (
            Project.objects
            .select_related("client", "assigned_to")
            .prefetch_related("skills_required", "proposals__freelancer")
            .get(pk=project_id)
        )
    except Project.DoesNotExist:
        raise ResourceNotFound("Project not found.")


def cancel_project(project_id, acting_client_id):
    with transaction.atomic():
        project = load_project(project_id, for_update=True)
        ensure_owner(project, acting_client_id)

        if project.status not in CANCELLABLE:
            raise InvalidState(f"A {project.get_status_display().lower()} project cannot be cancelled.")

        if not Project.objects.claim(project, status=Project.Status.CANCELLED):
            raise StateConflict("Project changed while cancelling; try again.")

        assignee_id = project.assigned_to_id
        transaction.on_commit(lambda: _announce(project.pk, assignee_id, "PROJECT_CANCELLED", "Project cancelled"))

    logger.info("Project %s cancelled by %s", project_id, acting_client_id)
    return get_project(project_id)


def complete_project(project_id, acting_client_id=None):
    """
    in_progress -> completed. Called by the owner, or by the payment flow
    without an actor once the final payment clears.
    """
    with transaction.atomic():
        project = load_project(project_id, for_update=True)
        if acting_client_id is not None:
            ensure_owner(project, acting_client_id)

        if project.status != Project.Status.IN_PROGRESS:
            raise InvalidState("Only projects in progress can be completed.")

        if not Project.objects.claim(project, status=Project.Status.COMPLETED):
            raise StateConflict("Project changed while completing; try again.")

        assignee_id = project.assigned_to_id
        transaction.on_commit(lambda: _announce(project.pk, assignee_id, "PROJECT_COMPLETED", "Project completed"))

    logger.info("Project %s completed", project_id)
    return get_project(project_id)


def delete_project(project_id, acting_client_id):
    with transaction.atomic():
        project = load_project(project_id, for_update=True)
        ensure_owner(project, acting_client_id)

        if not project.is_open:
            raise InvalidState("Only open projects can be deleted.")

        # proposals cascade; an accept that got in first moved the version
        deleted, _ = Project.objects.filter(
            pk=project.pk,
            version=project.version,
            status=Project.Status.OPEN,
        ).delete()
        if not deleted:
            raise StateConflict("Project changed while deleting; try again.")

    logger.info("Project %s deleted by %s", project_id, acting_client_id)


def _announce(project_id, assignee_id, notif_type, title):
    if assignee_id is None:
        return
    project = Project.objects.select_related("assigned_to").get(pk=project_id)
    notify_user(
        project.assigned_to,
        notif_type,
        title,
        message=f"\"{project.title}\" is now {project.get_status_display().lower()}.",
        data={"project_id": project.id},
    )
