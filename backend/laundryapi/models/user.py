"""
Laundry API Backend: User SQLAlchemy Model
============================================

What:  ORM model representing the `users` table.
Who:   Read and written by repositories.users; the Role enum is shared with
       the security layer.

Table Design Rationale:
    - Integer primary key: the owner is the seed row and always has id 1
    - username / email: UNIQUE, so duplicates surface as IntegrityError
    - password: bcrypt hash (60 chars), never the plaintext
    - role: constrained to the three known roles at the store level
"""

import enum
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from laundryapi.database import Base

# The seed owner record; immune to deletion and hidden from other roles
OWNER_ID = 1


class Role(str, enum.Enum):
    """Three-tier role model, highest first: owner > admin > user."""

    OWNER = "owner"
    ADMIN = "admin"
    USER = "user"


class User(Base):
    """
    A staff account.

    Lifecycle:
        1. Created by registration with role 'user'
        2. Updated by its holder (profile) or by the owner (any field)
        3. Deleted by an admin or the owner, except the owner itself
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(10), nullable=False, default=Role.USER.value)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
    )

    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin', 'owner')", name="ck_users_role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"
