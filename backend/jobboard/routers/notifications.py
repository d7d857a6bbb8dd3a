from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import CurrentUser, get_current_user
from jobboard.models.notification import Notification
from jobboard.schemas.notification import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from jobboard.services.notification_service import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_response(n: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=n.id,
        recipient_id=n.recipient_id,
        sender_id=n.sender_id,
        type=n.type,
        title=n.title,
        message=n.message,
        related_id=n.related_id,
        related_type=n.related_type,
        is_read=n.is_read,
        created_at=n.created_at,
    )


@router.get("/my-notifications", response_model=list[NotificationResponse])
async def my_notifications(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return [_notification_to_response(n) for n in notification_service.list_for(db, user.id)]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return UnreadCountResponse(count=notification_service.unread_count(db, user.id))


@router.put("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_read(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    count = notification_service.mark_all_read(db, user.id)
    return MarkAllReadResponse(message="All notifications marked as read", count=count)


@router.put("/{notification_id}/mark-read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _notification_to_response(notification_service.mark_read(db, notification_id, user.id))


@router.delete("/{notification_id}")
async def delete_notification(
    notification_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    notification_service.delete(db, notification_id, user.id)
    return {"message": "Notification deleted successfully"}
