
# ============================================================================
# FILE: goonj/db/models/user.py
# ============================================================================
from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from goonj.db.base import Base
from goonj.db.models.song import new_id

class User(Base):
    """User model for authentication and playlist ownership"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    playlists = relationship("Playlist", back_populates="user", cascade="all, delete-orphan")

