"""Folder factory for creating test folders."""

from datetime import datetime
from typing import Optional
from sqlalchemy import insert
from sqlalchemy.engine import Connection

from promptkeeper_server.core.database import folders_table
from .constants import TEST_USER_ID, TEST_FOLDER_NAME


def create_test_folder(
    conn: Connection,
    owner_id: str = TEST_USER_ID,
    name: str = TEST_FOLDER_NAME,
    updated_at: Optional[datetime] = None,
) -> int:
    """Create a test folder in the database.

    Args:
        conn: Database connection
        owner_id: Owning user id (defaults to TEST_USER_ID)
        name: Folder name
        updated_at: Explicit timestamp for both created_at and updated_at

    Returns:
        Created folder's id

    Example:
        with get_connection(db_engine) as conn:
            folder_id = create_test_folder(conn, name="Work")
    """
    values = {"owner_id": owner_id, "name": name}
    if updated_at is not None:
        values["created_at"] = updated_at
        values["updated_at"] = updated_at

    result = conn.execute(insert(folders_table).values(**values).returning(folders_table.c.id))
    return result.scalar_one()
