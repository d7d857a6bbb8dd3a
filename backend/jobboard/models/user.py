from sqlalchemy import JSON, Boolean, Column, Integer, Text
from jobboard.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Text, primary_key=True)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    role = Column(Text, nullable=False, index=True)
    profile_data = Column(JSON, nullable=False, default=dict)
    profile_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)


class ProfileStats(Base):
    __tablename__ = "profile_stats"

    user_id = Column(Text, primary_key=True)
    view_count = Column(Integer, nullable=False, default=0)
    last_viewed = Column(Text)
    recent_viewers = Column(JSON, nullable=False, default=list)
