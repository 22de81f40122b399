"""Prompt factory for creating test prompts."""

from datetime import datetime
from typing import Optional
from sqlalchemy import insert
from sqlalchemy.engine import Connection

from promptkeeper_server.core.database import prompts_table
from .constants import (
    TEST_USER_ID,
    TEST_PROMPT_NAME,
    TEST_PROMPT_DESCRIPTION,
    TEST_PROMPT_CONTENT,
)


def create_test_prompt(
    conn: Connection,
    owner_id: str = TEST_USER_ID,
    folder_id: Optional[int] = None,
    name: str = TEST_PROMPT_NAME,
    description: str = TEST_PROMPT_DESCRIPTION,
    content: str = TEST_PROMPT_CONTENT,
    updated_at: Optional[datetime] = None,
) -> int:
    """Create a test prompt in the database, bypassing ownership checks.

    Args:
        conn: Database connection
        owner_id: Owning user id (defaults to TEST_USER_ID)
        folder_id: Folder to place the prompt in (optional)
        name: Prompt name
        description: Prompt description
        content: Prompt text
        updated_at: Explicit timestamp for both created_at and updated_at

    Returns:
        Created prompt's id
    """
    values = {
        "owner_id": owner_id,
        "folder_id": folder_id,
        "name": name,
        "description": description,
        "content": content,
    }
    if updated_at is not None:
        values["created_at"] = updated_at
        values["updated_at"] = updated_at

    result = conn.execute(insert(prompts_table).values(**values).returning(prompts_table.c.id))
    return result.scalar_one()
