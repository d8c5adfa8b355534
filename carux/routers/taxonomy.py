"""
Taxonomy Router - Car UX Review Platform
carux/routers/taxonomy.py

Taxonomy versions, activation, import ("CUJ sync") and browsing.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Body, Depends, status

from carux.config import settings
from carux.core.dependencies import get_taxonomy_service
from carux.core.exceptions import EntityNotFoundException
from carux.models.report import ErrorResponse
from carux.models.taxonomy import (
    Category,
    SyncStatus,
    TaskWithCategory,
    TaxonomyImport,
    TaxonomyVersion,
    TaxonomyVersionCreate,
)
from carux.services.taxonomy_service import TaxonomyService

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/taxonomy", tags=["Taxonomy"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Version not found"}}


@router.get("/versions", response_model=List[TaxonomyVersion], summary="List taxonomy versions")
def list_versions(store: TaxonomyService = Depends(get_taxonomy_service)):
    return store.list_versions()


@router.post(
    "/versions",
    response_model=TaxonomyVersion,
    status_code=status.HTTP_201_CREATED,
    summary="Register a taxonomy version",
)
def create_version(
    payload: TaxonomyVersionCreate = Body(...),
    store: TaxonomyService = Depends(get_taxonomy_service),
):
    return store.create_version(payload)


@router.get(
    "/versions/active",
    response_model=TaxonomyVersion,
    responses=NOT_FOUND,
    summary="Get the active taxonomy version",
)
def get_active_version(store: TaxonomyService = Depends(get_taxonomy_service)):
    version = store.get_active_version()
    if version is None:
        raise EntityNotFoundException("TaxonomyVersion", "active")
    return version


@router.post(
    "/versions/{version_id}/activate",
    response_model=TaxonomyVersion,
    responses=NOT_FOUND,
    summary="Make a version the only active one",
)
def activate_version(version_id: UUID, store: TaxonomyService = Depends(get_taxonomy_service)):
    return store.set_active_version(version_id)


@router.get(
    "/versions/{version_id}/categories",
    response_model=List[Category],
    responses=NOT_FOUND,
    summary="List categories of a version",
)
def list_categories(version_id: UUID, store: TaxonomyService = Depends(get_taxonomy_service)):
    return store.list_categories(version_id)


@router.get(
    "/versions/{version_id}/tasks",
    response_model=List[TaskWithCategory],
    responses=NOT_FOUND,
    summary="List tasks of a version with journey and category",
)
def list_tasks(version_id: UUID, store: TaxonomyService = Depends(get_taxonomy_service)):
    return store.list_tasks(version_id)


@router.post(
    "/import",
    response_model=TaxonomyVersion,
    status_code=status.HTTP_201_CREATED,
    summary="Import a full taxonomy as a new version",
)
def import_taxonomy(
    payload: TaxonomyImport = Body(...),
    store: TaxonomyService = Depends(get_taxonomy_service),
):
    return store.import_taxonomy(payload)


@router.get("/sync-status", response_model=SyncStatus, summary="Last taxonomy import")
def get_sync_status(store: TaxonomyService = Depends(get_taxonomy_service)):
    return store.get_sync_status()
