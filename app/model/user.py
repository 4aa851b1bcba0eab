"""
User model.
"""
from sqlalchemy import CheckConstraint, Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from app.core.database import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("platform", "handle", name="uq_users_platform_handle"),
        UniqueConstraint("platform", "external_id", name="uq_users_platform_external_id"),
        CheckConstraint("platform IN ('twitter', 'telegram', 'email', 'other')", name="ck_users_platform"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    handle = Column(String, nullable=False)
    platform = Column(String(16), nullable=False)  # twitter | telegram | email | other
    slug = Column(String, unique=True, index=True, nullable=False)  # "<platform>-<handle>"
    external_id = Column(String, nullable=True, index=True)  # remote identity id (Twitter id_str)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
