"""
Auth persistence helpers.
"""

from __future__ import annotations

import uuid
from typing import Any

import asyncpg

from core import db


def new_user_id() -> str:
    return str(uuid.uuid4())


async def get_user_by_username(username: str) -> dict | None:
    # Usernames are not unique at the storage level; the oldest record wins.
    return await db.fetch_one(
        """
        SELECT id, username, email, password_hash, created_at
        FROM users
        WHERE username = $1
        ORDER BY created_at, id
        LIMIT 1
        """,
        username,
    )


async def replace_all_users(conn: asyncpg.Connection, users: list[dict[str, Any]]) -> int:
    """
    Delete every user and insert `users` (already hashed) on `conn`.

    Meant to run inside the seeding transaction.
    """
    await conn.execute("DELETE FROM users")
    records = [
        (new_user_id(), u["username"], u["email"], u["password_hash"])
        for u in users
    ]
    await conn.executemany(
        """
        INSERT INTO users (id, username, email, password_hash)
        VALUES ($1, $2, $3, $4)
        """,
        records,
    )
    return len(records)
