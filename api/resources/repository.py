"""
Resource persistence (raw SQL), shared by every resource type.

Table and column names come from the `ResourceType` descriptor; values are
always passed as positional parameters.
"""

from __future__ import annotations

import uuid
from typing import Any

import asyncpg

from core import db

from .descriptors import ResourceType


def new_resource_id() -> str:
    return str(uuid.uuid4())


def _select_list(resource: ResourceType) -> str:
    return ", ".join(resource.columns)


def _check_fields(resource: ResourceType, values: dict[str, Any]) -> None:
    unknown = set(values) - set(resource.fields)
    if unknown:
        raise ValueError(f"Unknown {resource.name} fields: {sorted(unknown)}")


async def insert(resource: ResourceType, values: dict[str, Any]) -> dict[str, Any]:
    """
    Insert one record. Fields missing from `values` are stored as NULL.
    """
    _check_fields(resource, values)
    params = [new_resource_id()] + [values.get(f) for f in resource.fields]
    placeholders = ", ".join(f"${i}" for i in range(1, len(params) + 1))
    row = await db.fetch_one(
        f"""
        INSERT INTO {resource.table} ({_select_list(resource)})
        VALUES ({placeholders})
        RETURNING {_select_list(resource)}
        """,
        *params,
    )
    if row is None:
        raise RuntimeError(f"Failed to insert into {resource.table}.")
    return row


async def list_all(resource: ResourceType) -> list[dict[str, Any]]:
    return await db.fetch_all(
        f"""
        SELECT {_select_list(resource)}
        FROM {resource.table}
        ORDER BY created_at, id
        """
    )


async def get_by_id(resource: ResourceType, resource_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {_select_list(resource)}
        FROM {resource.table}
        WHERE id = $1
        """,
        resource_id,
    )


async def update_by_id(
    resource: ResourceType,
    resource_id: str,
    values: dict[str, Any],
) -> dict[str, Any] | None:
    """
    Overwrite only the fields present in `values`.
    Returns the post-update row, or None when no such record exists.
    """
    _check_fields(resource, values)
    if not values:
        return await get_by_id(resource, resource_id)

    names = [f for f in resource.fields if f in values]
    assignments = ", ".join(f"{name} = ${i}" for i, name in enumerate(names, start=2))
    return await db.fetch_one(
        f"""
        UPDATE {resource.table}
        SET {assignments}
        WHERE id = $1
        RETURNING {_select_list(resource)}
        """,
        resource_id,
        *[values[name] for name in names],
    )


async def delete_by_id(resource: ResourceType, resource_id: str) -> bool:
    row = await db.fetch_one(
        f"""
        DELETE FROM {resource.table}
        WHERE id = $1
        RETURNING id
        """,
        resource_id,
    )
    return row is not None


async def replace_all(
    conn: asyncpg.Connection,
    resource: ResourceType,
    records: list[dict[str, Any]],
) -> int:
    """
    Delete every record of `resource` and insert `records` on `conn`.

    Meant to run inside the seeding transaction.
    """
    await conn.execute(f"DELETE FROM {resource.table}")
    for record in records:
        _check_fields(resource, record)

    rows = [
        tuple([new_resource_id()] + [record.get(f) for f in resource.fields])
        for record in records
    ]
    placeholders = ", ".join(f"${i}" for i in range(1, len(resource.columns) + 1))
    await conn.executemany(
        f"""
        INSERT INTO {resource.table} ({_select_list(resource)})
        VALUES ({placeholders})
        """,
        rows,
    )
    return len(rows)
