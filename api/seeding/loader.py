"""
Wipe-and-reload of the sample users and songs.

The whole load runs in one transaction that first takes the serving lock
exclusively, so it cannot run while any API process is up.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from auth import repository as auth_repository
from auth import security
from core import db, schema
from resources import repository as resources_repository
from resources.descriptors import SONGS

from . import data

logger = logging.getLogger(__name__)


class SeedRefusedError(RuntimeError):
    pass


@dataclass(frozen=True)
class SeedStats:
    users: int
    songs: int


def hashed_users() -> list[dict[str, str]]:
    return [
        {
            "username": user["username"],
            "email": user["email"],
            "password_hash": security.hash_password(user["password"]),
        }
        for user in data.sample_users()
    ]


async def seed() -> SeedStats:
    """
    Apply the schema, then replace all users and songs with the sample data.

    Banners are left untouched.
    """
    await schema.apply_schema()

    # Hash outside the transaction; bcrypt is slow on purpose.
    users = hashed_users()
    songs = data.sample_songs()

    async with db.transaction() as conn:
        if not await db.try_exclusive_serving_lock(conn):
            raise SeedRefusedError("An API server is running against this database; stop it before seeding.")

        user_count = await auth_repository.replace_all_users(conn, users)
        logger.info("users_seeded count=%s", user_count)

        song_count = await resources_repository.replace_all(conn, SONGS, songs)
        logger.info("songs_seeded count=%s", song_count)

    return SeedStats(users=user_count, songs=song_count)
