"""
Table definitions for the three collections.

Every record gets a server-generated text id and a `created_at` stamp that
defines list order. `clock_timestamp()` keeps rows inserted in one
transaction (seeding) in insertion order.
"""

from __future__ import annotations

from . import db

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id            text PRIMARY KEY,
    username      text,
    email         text,
    password_hash text NOT NULL,
    created_at    timestamptz NOT NULL DEFAULT clock_timestamp()
);

CREATE INDEX IF NOT EXISTS users_username_idx ON users (username);

CREATE TABLE IF NOT EXISTS songs (
    id         text PRIMARY KEY,
    title      text,
    artist     text,
    category   text,
    file       text,
    created_at timestamptz NOT NULL DEFAULT clock_timestamp()
);

CREATE TABLE IF NOT EXISTS banners (
    id         text PRIMARY KEY,
    title      text,
    image      text,
    created_at timestamptz NOT NULL DEFAULT clock_timestamp()
);
"""


async def apply_schema() -> None:
    await db.execute(SCHEMA_SQL)
