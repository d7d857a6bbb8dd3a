from pydantic import BaseModel


class NotificationResponse(BaseModel):
    id: str
    recipient_id: str
    sender_id: str | None
    type: str
    title: str
    message: str
    related_id: str | None
    related_type: str | None
    is_read: bool
    created_at: str


class UnreadCountResponse(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    message: str
    count: int
