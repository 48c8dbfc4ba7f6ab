from decimal import Decimal

import pytest
from django.core import mail
from django.urls import reverse

from apps.applications.services.proposal_lifecycle import (
    accept_proposal,
    reject_proposal,
    submit_proposal,
)
from apps.notifications.models import Notification
from apps.projects.services import cancel_project


@pytest.mark.django_db
class TestLifecycleNotifications:

    def test_submission_notifies_owner(self, project, owner, freelancer, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            proposal = submit_proposal(project.id, freelancer.id, Decimal("900.00"), "3 weeks", "Ready to go.")

        notif = Notification.objects.get(recipient=owner)
        assert notif.notif_type == "PROPOSAL_SUBMITTED"
        assert notif.data == {"project_id": project.id, "proposal_id": proposal.id}

    def test_nothing_is_sent_before_commit(self, project, owner, freelancer, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            submit_proposal(project.id, freelancer.id, Decimal("900.00"), "3 weeks", "Ready to go.")

        assert len(callbacks) == 1
        assert not Notification.objects.filter(recipient=owner).exists()

    def test_accept_notifies_winner_and_losers(self, project, owner, proposal_factory, django_capture_on_commit_callbacks):
        winner = proposal_factory(project=project)
        loser = proposal_factory(project=project)

        with django_capture_on_commit_callbacks(execute=True):
            accept_proposal(project.id, winner.id, owner.id)

        assert Notification.objects.get(recipient=winner.freelancer).notif_type == "PROPOSAL_ACCEPTED"
        assert Notification.objects.get(recipient=loser.freelancer).notif_type == "PROPOSAL_REJECTED"

    def test_accept_sends_email_to_winner(self, project, owner, proposal_factory, django_capture_on_commit_callbacks):
        winner = proposal_factory(project=project)

        with django_capture_on_commit_callbacks(execute=True):
            accept_proposal(project.id, winner.id, owner.id)

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == [winner.freelancer.email]
        assert project.title in mail.outbox[0].subject

    def test_reject_notifies_freelancer_without_email(self, project, owner, proposal_factory, django_capture_on_commit_callbacks):
        target = proposal_factory(project=project)

        with django_capture_on_commit_callbacks(execute=True):
            reject_proposal(project.id, target.id, owner.id)

        assert Notification.objects.get(recipient=target.freelancer).notif_type == "PROPOSAL_REJECTED"
        assert mail.outbox == []

    def test_cancel_notifies_assignee(self, project_factory, owner, freelancer, django_capture_on_commit_callbacks):
        project = project_factory(client=owner, status="in_progress", assigned_to=freelancer)

        with django_capture_on_commit_callbacks(execute=True):
            cancel_project(project.id, owner.id)

        assert Notification.objects.get(recipient=freelancer).notif_type == "PROJECT_CANCELLED"

    def test_cancel_open_project_is_silent(self, project, owner, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            cancel_project(project.id, owner.id)

        assert not Notification.objects.exists()


@pytest.mark.django_db
class TestNotificationApi:

    def test_lists_only_own_notifications(self, freelancer_api_client, freelancer, owner):
        mine = Notification.objects.create(recipient=freelancer, notif_type="SYSTEM", title="Welcome")
        Notification.objects.create(recipient=owner, notif_type="SYSTEM", title="Welcome")

        response = freelancer_api_client.get(reverse("notification-list"))

        assert response.status_code == 200
        assert [n["id"] for n in response.data["results"]] == [mine.id]

    def test_filter_unread(self, freelancer_api_client, freelancer):
        Notification.objects.create(recipient=freelancer, notif_type="SYSTEM", title="Old", is_read=True)
        unread = Notification.objects.create(recipient=freelancer, notif_type="SYSTEM", title="New")

        response = freelancer_api_client.get(reverse("notification-list"), {"is_read": "false"})

        assert [n["id"] for n in response.data["results"]] == [unread.id]

    def test_mark_read(self, freelancer_api_client, freelancer):
        notif = Notification.objects.create(recipient=freelancer, notif_type="SYSTEM", title="Hi")

        response = freelancer_api_client.post(reverse("notification-read", args=[notif.id]))

        assert response.status_code == 200
        assert response.data["is_read"] is True
        notif.refresh_from_db()
        assert notif.is_read

    def test_cannot_mark_someone_elses(self, freelancer_api_client, owner):
        notif = Notification.objects.create(recipient=owner, notif_type="SYSTEM", title="Hi")

        response = freelancer_api_client.post(reverse("notification-read", args=[notif.id]))

        assert response.status_code == 404

    def test_requires_authentication(self, api_client):
        assert api_client.get(reverse("notification-list")).status_code == 401
