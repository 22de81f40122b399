"""Prompt manager for owner-scoped prompts and their folder placement."""

import logging
from typing import Dict, List, Optional
from datetime import datetime

from sqlalchemy import select, insert, update, delete, and_
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from .database import folders_table, prompts_table, get_connection, utc_now
from .exceptions import ConstraintViolation, InvalidReference, PromptNotFound
from .identity import resolve_current_user

logger = logging.getLogger(__name__)


class Prompt:
    """Represents a stored prompt."""

    def __init__(
        self,
        id: int,
        owner_id: str,
        name: str,
        description: str,
        content: str,
        folder_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.owner_id = owner_id
        self.folder_id = folder_id
        self.name = name
        self.description = description
        self.content = content
        self.created_at = created_at
        self.updated_at = updated_at

    def to_dict(self) -> Dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "folder_id": self.folder_id,
            "name": self.name,
            "description": self.description,
            "content": self.content,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class PromptManager:
    """Manager for owner-scoped prompts with database operations.

    A prompt may live in at most one folder. The database only guarantees that
    the folder exists; that it belongs to the same user is checked here on
    every write that sets folder_id.
    """

    def __init__(self, engine: Engine, owner_id: Optional[str]):
        """Initialize prompt manager.

        Args:
            engine: SQLAlchemy engine instance
            owner_id: Id of the signed-in user this manager is scoped to

        Raises:
            Unauthenticated: If owner_id is missing
        """
        self.engine = engine
        self.owner_id = resolve_current_user(owner_id)

    def _owned(self, prompt_id: int):
        return and_(
            prompts_table.c.id == prompt_id,
            prompts_table.c.owner_id == self.owner_id,
        )

    def _check_folder(self, conn: Connection, folder_id: int) -> None:
        """Verify the folder exists and is owned by the user.

        The row stays locked until the surrounding transaction ends so it
        cannot be deleted between the check and the write.

        Raises:
            InvalidReference: If the folder is missing or owned by someone else
        """
        row = conn.execute(
            select(folders_table.c.id)
            .where(
                and_(
                    folders_table.c.id == folder_id,
                    folders_table.c.owner_id == self.owner_id,
                )
            )
            .with_for_update()
        ).fetchone()

        if not row:
            raise InvalidReference(f"Folder {folder_id} does not exist")

    def list_all(self) -> List[Prompt]:
        """List every prompt owned by the user, oldest first."""
        with get_connection(self.engine) as conn:
            stmt = (
                select(prompts_table)
                .where(prompts_table.c.owner_id == self.owner_id)
                .order_by(prompts_table.c.created_at, prompts_table.c.id)
            )
            rows = conn.execute(stmt).fetchall()

        return [self._row_to_prompt(row) for row in rows]

    def list_by_folder(self, folder_id: Optional[int]) -> List[Prompt]:
        """List the user's prompts in a folder.

        Args:
            folder_id: Folder to list, or None for unfiled prompts

        Returns:
            List of Prompt objects, oldest first
        """
        if folder_id is None:
            folder_clause = prompts_table.c.folder_id.is_(None)
        else:
            folder_clause = prompts_table.c.folder_id == folder_id

        with get_connection(self.engine) as conn:
            stmt = (
                select(prompts_table)
                .where(and_(prompts_table.c.owner_id == self.owner_id, folder_clause))
                .order_by(prompts_table.c.created_at, prompts_table.c.id)
            )
            rows = conn.execute(stmt).fetchall()

        return [self._row_to_prompt(row) for row in rows]

    def get(self, prompt_id: int) -> Prompt:
        """Get a specific prompt by ID.

        Raises:
            PromptNotFound: If the prompt doesn't exist or belongs to another user
        """
        with get_connection(self.engine) as conn:
            row = conn.execute(select(prompts_table).where(self._owned(prompt_id))).fetchone()

        if not row:
            raise PromptNotFound(f"Prompt {prompt_id} not found")

        return self._row_to_prompt(row)

    def create(
        self,
        name: str,
        description: str,
        content: str,
        folder_id: Optional[int] = None,
    ) -> Prompt:
        """Create a new prompt, optionally inside a folder.

        Args:
            name: Name of the prompt
            description: Short description of what the prompt does
            content: The prompt text
            folder_id: Folder to file the prompt under (optional)

        Returns:
            Created Prompt object

        Raises:
            InvalidReference: If folder_id is not one of the user's folders
            ConstraintViolation: If the storage layer rejects the row
        """
        now = utc_now()
        try:
            with get_connection(self.engine) as conn:
                if folder_id is not None:
                    self._check_folder(conn, folder_id)

                stmt = (
                    insert(prompts_table)
                    .values(
                        owner_id=self.owner_id,
                        folder_id=folder_id,
                        name=name,
                        description=description,
                        content=content,
                        created_at=now,
                        updated_at=now,
                    )
                    .returning(prompts_table)
                )
                row = conn.execute(stmt).fetchone()
        except IntegrityError as e:
            raise ConstraintViolation(f"Failed to create prompt: {e.orig}") from e

        if not row:
            raise ConstraintViolation("Failed to create prompt")

        logger.info(
            "Prompt created",
            extra={"prompt_id": row.id, "owner_id": self.owner_id, "folder_id": folder_id},
        )
        return self._row_to_prompt(row)

    def update(
        self,
        prompt_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Prompt:
        """Edit a prompt's text fields.

        Only the fields that are given change. Calling without any field is a
        read and leaves updated_at alone.

        Raises:
            PromptNotFound: If the prompt doesn't exist or belongs to another user
        """
        values = {}
        if name is not None:
            values["name"] = name
        if description is not None:
            values["description"] = description
        if content is not None:
            values["content"] = content

        if not values:
            return self.get(prompt_id)

        values["updated_at"] = utc_now()

        try:
            with get_connection(self.engine) as conn:
                stmt = (
                    update(prompts_table)
                    .where(self._owned(prompt_id))
                    .values(**values)
                    .returning(prompts_table)
                )
                row = conn.execute(stmt).fetchone()
        except IntegrityError as e:
            raise ConstraintViolation(f"Failed to update prompt {prompt_id}: {e.orig}") from e

        if not row:
            raise PromptNotFound(f"Prompt {prompt_id} not found")

        return self._row_to_prompt(row)

    def move_to_folder(self, prompt_id: int, folder_id: Optional[int]) -> Prompt:
        """Move a prompt into a folder, or out of any folder with None.

        Raises:
            PromptNotFound: If the prompt doesn't exist or belongs to another user
            InvalidReference: If folder_id is not one of the user's folders
        """
        try:
            with get_connection(self.engine) as conn:
                existing = conn.execute(
                    select(prompts_table.c.id).where(self._owned(prompt_id)).with_for_update()
                ).fetchone()

                if not existing:
                    raise PromptNotFound(f"Prompt {prompt_id} not found")

                if folder_id is not None:
                    self._check_folder(conn, folder_id)

                stmt = (
                    update(prompts_table)
                    .where(self._owned(prompt_id))
                    .values(folder_id=folder_id, updated_at=utc_now())
                    .returning(prompts_table)
                )
                row = conn.execute(stmt).fetchone()
        except IntegrityError as e:
            raise ConstraintViolation(f"Failed to move prompt {prompt_id}: {e.orig}") from e

        logger.info(
            "Prompt moved",
            extra={"prompt_id": prompt_id, "owner_id": self.owner_id, "folder_id": folder_id},
        )
        return self._row_to_prompt(row)

    def delete(self, prompt_id: int) -> None:
        """Delete a prompt.

        Raises:
            PromptNotFound: If the prompt doesn't exist or belongs to another user
        """
        with get_connection(self.engine) as conn:
            result = conn.execute(delete(prompts_table).where(self._owned(prompt_id)))
            if result.rowcount == 0:
                raise PromptNotFound(f"Prompt {prompt_id} not found")

    def _row_to_prompt(self, row) -> Prompt:
        """Convert database row to Prompt object."""
        return Prompt(
            id=row.id,
            owner_id=row.owner_id,
            folder_id=row.folder_id,
            name=row.name,
            description=row.description,
            content=row.content,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
