import logging

from apps.notifications.models import Notification

logger = logging.getLogger(__name__)


def notify_user(recipient, notif_type, title, message="", data=None):

    if data is None:
        data = {}

    notif = Notification.objects.create(
        recipient=recipient,
        notif_type=notif_type,
        title=title,
        message=message,
        data=data
    )
    logger.info("Notification %s (%s) created for user %s", notif.id, notif_type, notif.recipient_id)

    return notif
