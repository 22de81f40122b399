"""Pytest fixtures for Promptkeeper tests."""

from .database import db_engine, db_connection
from .auth import override_db_engine, override_auth_dependencies
from .entities import test_folder, test_prompt, cleanup_data

__all__ = [
    # Database fixtures
    "db_engine",
    "db_connection",
    # Auth fixtures
    "override_db_engine",
    "override_auth_dependencies",
    # Entity fixtures
    "test_folder",
    "test_prompt",
    "cleanup_data",
]
