# ============================================================================
# User Model
# ============================================================================
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum
from app.core.database import Base

class RPSChoice(str, enum.Enum):
    ROCK = "Rock"
    PAPER = "Paper"
    SCISSORS = "Scissors"

# Progression defaults for a freshly registered account
DEFAULT_LEVEL = 1
DEFAULT_EXPERIENCE_FOR_DAY = 1000
DEFAULT_BUDDY_LEVEL = 1
DEFAULT_BUDDY_EXPERIENCE_FOR_DAY = 2000

class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    verified_email = Column(Boolean, default=False)
    is_operator = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Primary progression track
    level = Column(Integer, nullable=False, default=DEFAULT_LEVEL)
    experience_points = Column(Integer, nullable=False, default=0)
    experience_for_day = Column(Integer, nullable=False, default=DEFAULT_EXPERIENCE_FOR_DAY)

    # Buddy progression track
    buddy_level = Column(Integer, nullable=False, default=DEFAULT_BUDDY_LEVEL, index=True)
    buddy_experience_points = Column(Integer, nullable=False, default=0)
    buddy_experience_for_day = Column(Integer, nullable=False, default=DEFAULT_BUDDY_EXPERIENCE_FOR_DAY)

    # Bumped by every progression write; awards update conditionally on it
    progress_version = Column(Integer, nullable=False, default=0)

    # Rock Paper Scissors
    current_play = Column(String(10), default=RPSChoice.ROCK.value)
    current_rps_streak = Column(Integer, default=0)
    highest_rps_streak = Column(Integer, default=0)

    # Relationships
    following = relationship(
        "Follow", back_populates="requesting_user",
        foreign_keys="Follow.requesting_user_id", cascade="all, delete-orphan"
    )
    followers = relationship(
        "Follow", back_populates="targeted_user",
        foreign_keys="Follow.targeted_user_id", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User {self.username} (level {self.level})>"
