"""
Router factory for resource endpoints.

`build_router(SONGS)` mounts the five CRUD routes for songs; the same call
with `BANNERS` does it for banners. Every route requires a valid token.

Request models are taken from the descriptor at build time, so this module
keeps runtime annotations (no postponed evaluation).
"""

from fastapi import APIRouter, Depends, status

from auth import dependencies as auth_dependencies

from . import schemas, service
from .descriptors import ResourceType


def build_router(resource: ResourceType) -> APIRouter:
    fields_model = resource.fields_model
    response_model = resource.response_model

    router = APIRouter(
        prefix=f"/{resource.name}",
        tags=[resource.name],
        dependencies=[Depends(auth_dependencies.get_current_user)],
    )

    @router.post("", status_code=status.HTTP_201_CREATED, response_model=response_model)
    async def create_resource(payload: fields_model) -> dict:
        return await service.create(resource, payload)

    @router.get("", response_model=list[response_model])
    async def list_resources() -> list[dict]:
        return await service.list_all(resource)

    @router.get("/{resource_id}", response_model=response_model)
    async def get_resource(resource_id: str) -> dict:
        return await service.get_by_id(resource, resource_id)

    @router.put("/{resource_id}", response_model=response_model)
    async def update_resource(resource_id: str, payload: fields_model) -> dict:
        return await service.update_by_id(resource, resource_id, payload)

    @router.delete("/{resource_id}", response_model=schemas.DeletedResponse)
    async def delete_resource(resource_id: str) -> dict:
        return await service.delete_by_id(resource, resource_id)

    return router
