"""Prompt API routes."""

from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Query
from pydantic import BaseModel
from sqlalchemy.engine import Engine

from ..auth import get_current_user_id
from ..core.database import get_engine
from ..core.exceptions import ConstraintViolation, InvalidReference, PromptNotFound
from ..core.prompt_manager import PromptManager


router = APIRouter(prefix="/api/prompts", tags=["prompts"])


class PromptResponse(BaseModel):
    """Response model for a single prompt."""

    id: int
    owner_id: str
    folder_id: Optional[int]
    name: str
    description: str
    content: str
    created_at: Optional[str]
    updated_at: Optional[str]


class PromptListResponse(BaseModel):
    prompts: List[PromptResponse]


class CreatePromptRequest(BaseModel):
    """Request model for creating a prompt."""

    name: str
    description: str
    content: str
    folder_id: Optional[int] = None


class UpdatePromptRequest(BaseModel):
    """Request model for editing a prompt."""

    name: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None


class MovePromptRequest(BaseModel):
    """Target folder for a prompt; null moves it out of any folder."""

    folder_id: Optional[int] = None


def get_prompt_manager(
    user_id: str = Depends(get_current_user_id),
    engine: Engine = Depends(get_engine),
) -> PromptManager:
    """Get a PromptManager scoped to the signed-in user."""
    return PromptManager(engine, user_id)


@router.get("", response_model=PromptListResponse)
async def list_prompts(
    folder_id: Optional[int] = Query(None, description="Only prompts in this folder"),
    unfiled: bool = Query(False, description="Only prompts that are not in a folder"),
    manager: PromptManager = Depends(get_prompt_manager),
):
    """List the user's prompts, optionally filtered by folder."""
    if unfiled:
        prompts = manager.list_by_folder(None)
    elif folder_id is not None:
        prompts = manager.list_by_folder(folder_id)
    else:
        prompts = manager.list_all()

    return PromptListResponse(prompts=[PromptResponse(**p.to_dict()) for p in prompts])


@router.get("/{prompt_id}", response_model=PromptResponse)
async def get_prompt(prompt_id: int, manager: PromptManager = Depends(get_prompt_manager)):
    """Get a specific prompt by ID."""
    try:
        prompt = manager.get(prompt_id)
    except PromptNotFound:
        raise HTTPException(status_code=404, detail=f"Prompt {prompt_id} not found")
    return PromptResponse(**prompt.to_dict())


@router.post("", response_model=PromptResponse, status_code=201)
async def create_prompt(
    request: CreatePromptRequest, manager: PromptManager = Depends(get_prompt_manager)
):
    """Create a new prompt, optionally inside a folder."""
    try:
        prompt = manager.create(
            name=request.name,
            description=request.description,
            content=request.content,
            folder_id=request.folder_id,
        )
    except InvalidReference as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    return PromptResponse(**prompt.to_dict())


@router.put("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: int,
    request: UpdatePromptRequest,
    manager: PromptManager = Depends(get_prompt_manager),
):
    """Edit a prompt's name, description or content."""
    try:
        prompt = manager.update(
            prompt_id,
            name=request.name,
            description=request.description,
            content=request.content,
        )
    except PromptNotFound:
        raise HTTPException(status_code=404, detail=f"Prompt {prompt_id} not found")
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    return PromptResponse(**prompt.to_dict())


@router.put("/{prompt_id}/folder", response_model=PromptResponse)
async def move_prompt(
    prompt_id: int,
    request: MovePromptRequest,
    manager: PromptManager = Depends(get_prompt_manager),
):
    """Move a prompt into a folder, or out of one."""
    try:
        prompt = manager.move_to_folder(prompt_id, request.folder_id)
    except PromptNotFound:
        raise HTTPException(status_code=404, detail=f"Prompt {prompt_id} not found")
    except InvalidReference as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ConstraintViolation as e:
        raise HTTPException(status_code=409, detail=str(e))
    return PromptResponse(**prompt.to_dict())


@router.delete("/{prompt_id}", status_code=204)
async def delete_prompt(prompt_id: int, manager: PromptManager = Depends(get_prompt_manager)):
    """Delete a prompt."""
    try:
        manager.delete(prompt_id)
    except PromptNotFound:
        raise HTTPException(status_code=404, detail=f"Prompt {prompt_id} not found")
