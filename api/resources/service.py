"""
Resource business logic: the five CRUD operations for any resource type.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel

from . import repository
from .descriptors import ResourceType

logger = logging.getLogger(__name__)


def _not_found(resource: ResourceType) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=resource.not_found_message(),
    )


async def create(resource: ResourceType, payload: BaseModel) -> dict[str, Any]:
    row = await repository.insert(resource, payload.model_dump())
    logger.info("resource_created type=%s id=%s", resource.name, row["id"])
    return row


async def list_all(resource: ResourceType) -> list[dict[str, Any]]:
    return await repository.list_all(resource)


async def get_by_id(resource: ResourceType, resource_id: str) -> dict[str, Any]:
    row = await repository.get_by_id(resource, resource_id)
    if row is None:
        raise _not_found(resource)
    return row


async def update_by_id(
    resource: ResourceType,
    resource_id: str,
    payload: BaseModel,
) -> dict[str, Any]:
    """
    Apply the fields the caller actually sent; omitted fields keep their value.
    An explicit null clears a field.
    """
    values = payload.model_dump(exclude_unset=True)
    row = await repository.update_by_id(resource, resource_id, values)
    if row is None:
        raise _not_found(resource)
    logger.info("resource_updated type=%s id=%s fields=%s", resource.name, resource_id, sorted(values))
    return row


async def delete_by_id(resource: ResourceType, resource_id: str) -> dict[str, str]:
    deleted = await repository.delete_by_id(resource, resource_id)
    if not deleted:
        raise _not_found(resource)
    logger.info("resource_deleted type=%s id=%s", resource.name, resource_id)
    return {"message": resource.deleted_message()}
