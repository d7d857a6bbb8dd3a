from sqlalchemy.orm import Session

from jobboard.models.notification import Notification
from jobboard.repositories.base import Repository


class NotificationRepository(Repository):
    model = Notification
    label = "Notification"

    def for_recipient(self, db: Session, recipient_id: str) -> list[Notification]:
        return self.find_by(
            db, Notification.recipient_id == recipient_id, order_by=Notification.created_at.desc()
        )

    def unread_count(self, db: Session, recipient_id: str) -> int:
        return self.count(db, Notification.recipient_id == recipient_id, Notification.is_read.is_(False))

    def mark_all_read(self, db: Session, recipient_id: str) -> int:
        count = (
            db.query(Notification)
            .filter(Notification.recipient_id == recipient_id, Notification.is_read.is_(False))
            .update({Notification.is_read: True}, synchronize_session=False)
        )
        self._commit(db)
        return count


notification_repository = NotificationRepository()
