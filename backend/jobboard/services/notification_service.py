import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.errors import AuthorizationError, ServiceError
from jobboard.models.notification import Notification
from jobboard.repositories.notifications import notification_repository
from jobboard.utils.clock import utcnow

logger = logging.getLogger(__name__)

JOB_APPLICATION = "job_application"
APPLICATION_STATUS = "application_status"
JOB_CLOSED = "job_closed"


class NotificationService:
    def notify(
        self,
        db: Session,
        recipient_id: str,
        type: str,
        title: str,
        message: str,
        sender_id: str | None = None,
        related_id: str | None = None,
        related_type: str | None = None,
    ) -> Notification:
        return notification_repository.create(
            db,
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=type,
            title=title,
            message=message,
            related_id=related_id,
            related_type=related_type,
            is_read=False,
            created_at=utcnow(),
        )

    def fan_out(self, db: Session, **fields) -> Notification | None:
        """Best-effort notify: the triggering write has already committed,
        so a failure here is logged and the caller carries on."""
        try:
            return self.notify(db, **fields)
        except (SQLAlchemyError, ServiceError):
            db.rollback()
            logger.exception(
                "Could not write %s notification for recipient %s",
                fields.get("type"), fields.get("recipient_id"),
            )
            return None

    def list_for(self, db: Session, recipient_id: str) -> list[Notification]:
        return notification_repository.for_recipient(db, recipient_id)

    def unread_count(self, db: Session, recipient_id: str) -> int:
        return notification_repository.unread_count(db, recipient_id)

    def mark_read(self, db: Session, notification_id: str, requester_id: str) -> Notification:
        notification = self._owned(db, notification_id, requester_id, "update")
        if notification.is_read:
            return notification
        return notification_repository.update(db, notification.id, {"is_read": True})

    def mark_all_read(self, db: Session, requester_id: str) -> int:
        return notification_repository.mark_all_read(db, requester_id)

    def delete(self, db: Session, notification_id: str, requester_id: str) -> None:
        notification = self._owned(db, notification_id, requester_id, "delete")
        notification_repository.delete(db, notification.id)

    def _owned(self, db: Session, notification_id: str, requester_id: str, action: str) -> Notification:
        notification = notification_repository.get(db, notification_id)
        if notification.recipient_id != requester_id:
            raise AuthorizationError(f"Not authorized to {action} this notification")
        return notification


notification_service = NotificationService()
