"""Folder manager for owner-scoped prompt folders."""

import logging
from typing import Dict, List, Optional
from datetime import datetime

from sqlalchemy import select, insert, update, delete, and_
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from .database import folders_table, prompts_table, get_connection, utc_now
from .exceptions import ConstraintViolation, FolderNotFound
from .identity import resolve_current_user

logger = logging.getLogger(__name__)


class Folder:
    """Represents a folder."""

    def __init__(
        self,
        id: int,
        owner_id: str,
        name: str,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.owner_id = owner_id
        self.name = name
        self.created_at = created_at
        self.updated_at = updated_at

    def to_dict(self) -> Dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "name": self.name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class FolderManager:
    """Manager for owner-scoped folders with database operations."""

    def __init__(self, engine: Engine, owner_id: Optional[str]):
        """Initialize folder manager.

        Args:
            engine: SQLAlchemy engine instance
            owner_id: Id of the signed-in user this manager is scoped to

        Raises:
            Unauthenticated: If owner_id is missing
        """
        self.engine = engine
        self.owner_id = resolve_current_user(owner_id)

    def _owned(self, folder_id: int):
        return and_(
            folders_table.c.id == folder_id,
            folders_table.c.owner_id == self.owner_id,
        )

    def list_all(self) -> List[Folder]:
        """List all folders owned by the user, oldest first.

        Returns:
            List of Folder objects
        """
        with get_connection(self.engine) as conn:
            stmt = (
                select(folders_table)
                .where(folders_table.c.owner_id == self.owner_id)
                .order_by(folders_table.c.created_at, folders_table.c.id)
            )
            rows = conn.execute(stmt).fetchall()

        return [self._row_to_folder(row) for row in rows]

    def get(self, folder_id: int) -> Folder:
        """Get a specific folder by ID.

        Raises:
            FolderNotFound: If the folder doesn't exist or belongs to another user
        """
        with get_connection(self.engine) as conn:
            row = conn.execute(select(folders_table).where(self._owned(folder_id))).fetchone()

        if not row:
            raise FolderNotFound(f"Folder {folder_id} not found")

        return self._row_to_folder(row)

    def create(self, name: str) -> Folder:
        """Create a new folder.

        Args:
            name: Folder name (need not be unique)

        Returns:
            Created Folder object

        Raises:
            ConstraintViolation: If the storage layer rejects the row
        """
        now = utc_now()
        try:
            with get_connection(self.engine) as conn:
                stmt = (
                    insert(folders_table)
                    .values(
                        owner_id=self.owner_id,
                        name=name,
                        created_at=now,
                        updated_at=now,
                    )
                    .returning(folders_table)
                )
                row = conn.execute(stmt).fetchone()
        except IntegrityError as e:
            raise ConstraintViolation(f"Failed to create folder: {e.orig}") from e

        if not row:
            raise ConstraintViolation("Failed to create folder")

        logger.info("Folder created", extra={"folder_id": row.id, "owner_id": self.owner_id})
        return self._row_to_folder(row)

    def rename(self, folder_id: int, name: str) -> Folder:
        """Rename a folder.

        Raises:
            FolderNotFound: If the folder doesn't exist or belongs to another user
            ConstraintViolation: If the storage layer rejects the change
        """
        try:
            with get_connection(self.engine) as conn:
                stmt = (
                    update(folders_table)
                    .where(self._owned(folder_id))
                    .values(name=name, updated_at=utc_now())
                    .returning(folders_table)
                )
                row = conn.execute(stmt).fetchone()
        except IntegrityError as e:
            raise ConstraintViolation(f"Failed to rename folder {folder_id}: {e.orig}") from e

        if not row:
            raise FolderNotFound(f"Folder {folder_id} not found")

        return self._row_to_folder(row)

    def delete(self, folder_id: int) -> int:
        """Delete a folder and detach its prompts.

        Prompts in the folder are kept and become unfiled. The detach and the
        delete run in a single transaction.

        Args:
            folder_id: The folder identifier

        Returns:
            Number of prompts that were detached

        Raises:
            FolderNotFound: If the folder doesn't exist or belongs to another user
            ConstraintViolation: If the storage layer rejects the change
        """
        try:
            with get_connection(self.engine) as conn:
                existing = conn.execute(
                    select(folders_table.c.id).where(self._owned(folder_id)).with_for_update()
                ).fetchone()

                if not existing:
                    raise FolderNotFound(f"Folder {folder_id} not found")

                # Mirrors the ON DELETE SET NULL clause so updated_at is touched too
                detached = conn.execute(
                    update(prompts_table)
                    .where(prompts_table.c.folder_id == folder_id)
                    .values(folder_id=None, updated_at=utc_now())
                ).rowcount

                conn.execute(delete(folders_table).where(self._owned(folder_id)))
        except IntegrityError as e:
            raise ConstraintViolation(f"Failed to delete folder {folder_id}: {e.orig}") from e

        logger.info(
            "Folder deleted",
            extra={"folder_id": folder_id, "owner_id": self.owner_id, "prompts_detached": detached},
        )
        return detached

    def _row_to_folder(self, row) -> Folder:
        """Convert database row to Folder object."""
        return Folder(
            id=row.id,
            owner_id=row.owner_id,
            name=row.name,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
