# ============================================================================
# Social Graph Models
# ============================================================================
from sqlalchemy import Column, ForeignKey, DateTime, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.core.database import Base

class Follow(Base):
    __tablename__ = "follows"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    requesting_user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    targeted_user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    requesting_user = relationship("User", back_populates="following", foreign_keys=[requesting_user_id])
    targeted_user = relationship("User", back_populates="followers", foreign_keys=[targeted_user_id])

    __table_args__ = (
        UniqueConstraint('requesting_user_id', 'targeted_user_id', name='unique_follow'),
    )

    def __repr__(self):
        return f"<Follow {self.requesting_user_id} -> {self.targeted_user_id}>"
