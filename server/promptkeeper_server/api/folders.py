"""Folder API routes."""

from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from sqlalchemy.engine import Engine

from ..auth import get_current_user_id
from ..core.database import get_engine
from ..core.exceptions import ConstraintViolation, FolderNotFound
from ..core.folder_manager import FolderManager


router = APIRouter(prefix="/api/folders", tags=["folders"])


class FolderResponse(BaseModel):
    """Response model for a single folder."""

    id: int
    owner_id: str
    name: str
    created_at: Optional[str]
    updated_at: Optional[str]


class FolderListResponse(BaseModel):
    folders: List[FolderResponse]


class CreateFolderRequest(BaseModel):
    name: str


class RenameFolderRequest(BaseModel):
    name: str


def get_folder_manager(
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_engine),
) -> FolderManager:
    """Get a FolderManager scoped to the signed-in user."""
    return FolderManager(engine, user_id)


@router.get("", response_model=FolderListResponse)
async def list_folders(manager: FolderManager = Depends(get_folder_manager)):
    """List the user's folders."""
    return FolderListResponse(
        folders=[FolderResponse(**folder.to_dict()) for folder in manager.list_all()]
    )


@router.post("", response_model=FolderResponse, status_code=201)
async def create_folder(
    request: CreateFolderRequest, manager: FolderManager = Depends(get_folder_manager)
):
    """Create a new folder."""
    try:
        folder = manager.create(request.name)
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    return FolderResponse(**folder.to_dict())


@router.patch("/{folder_id}", response_model=FolderResponse)
async def rename_folder(
    folder_id: int,
    request: RenameFolderRequest,
    manager: FolderManager = Depends(get_folder_manager),
):
    """Rename a folder."""
    try:
        folder = manager.rename(folder_id, request.name)
    except FolderNotFound:
        raise HTTPException(status_code=404, detail=f"Folder {folder_id} not found")
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    return FolderResponse(**folder.to_dict())


@router.delete("/{folder_id}", status_code=204)
async def delete_folder(folder_id: int, manager: FolderManager = Depends(get_folder_manager)):
    """Delete a folder. Its prompts are kept and become unfiled."""
    try:
        manager.delete(folder_id)
    except FolderNotFound:
        raise HTTPException(status_code=404, detail=f"Folder {folder_id} not found")
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
