from sqlalchemy import Boolean, Column, Text
from jobboard.database import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Text, primary_key=True)
    recipient_id = Column(Text, nullable=False, index=True)
    sender_id = Column(Text)
    type = Column(Text, nullable=False, index=True)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    related_id = Column(Text)
    related_type = Column(Text)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(Text, nullable=False, index=True)
