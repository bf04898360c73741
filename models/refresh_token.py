"""
RefreshToken model: one row per issued refresh token.
Fields:
- token (primary key) - the opaque value handed to the client
- user_id (String(36)) - FK to users.id
- expires_at - fixed at issue time, never extended
- revoked_at - null until revoked; rows are tombstoned, never deleted
- created_at, updated_at
"""
from sqlalchemy import Column, String, DateTime, ForeignKey
from models.base_model import Base, TimestampMixin


class RefreshToken(TimestampMixin, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<RefreshToken user_id={self.user_id} expires_at={self.expires_at}>"
