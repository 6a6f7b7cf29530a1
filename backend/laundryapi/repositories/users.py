"""
Laundry API Backend: Users Repository
=======================================

Statements against the `users` table. See the package docstring for the
contract every function follows.
"""

from typing import List, Optional

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import RowMapping
from sqlalchemy.ext.asyncio import AsyncSession

from laundryapi.models.user import User
from laundryapi.repositories.base import WriteResult

users = User.__table__


async def list_users(db: AsyncSession) -> List[RowMapping]:
    result = await db.execute(select(users).order_by(users.c.id))
    return list(result.mappings().all())


async def get_user_by_id(db: AsyncSession, user_id: int) -> Optional[RowMapping]:
    result = await db.execute(select(users).where(users.c.id == user_id))
    return result.mappings().one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[RowMapping]:
    """Login lookup. Usernames are unique, so at most one row matches."""
    result = await db.execute(select(users).where(users.c.username == username))
    return result.mappings().one_or_none()


async def count_users(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(users))
    return result.scalar_one()


async def create_user(
    db: AsyncSession,
    name: str,
    username: str,
    email: str,
    password_hash: str,
    role: str,
) -> WriteResult:
    result = await db.execute(
        insert(users).values(
            name=name,
            username=username,
            email=email,
            password=password_hash,
            role=role,
        )
    )
    return WriteResult.from_insert(result)


async def update_user(
    db: AsyncSession,
    user_id: int,
    name: str,
    username: str,
    email: str,
    password_hash: str,
    role: Optional[str] = None,
) -> WriteResult:
    """Rewrite a user row; the role column is left alone when role is None."""
    values = {
        "name": name,
        "username": username,
        "email": email,
        "password": password_hash,
    }
    if role is not None:
        values["role"] = role
    result = await db.execute(update(users).where(users.c.id == user_id).values(**values))
    return WriteResult.from_change(result)


async def delete_user(db: AsyncSession, user_id: int) -> WriteResult:
    result = await db.execute(delete(users).where(users.c.id == user_id))
    return WriteResult.from_change(result)
