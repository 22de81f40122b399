"""Test data factories for consistent test entities."""

from .constants import TEST_USER_ID, OTHER_USER_ID, make_test_user_id
from .folders import create_test_folder
from .prompts import create_test_prompt

__all__ = [
    # Constants
    "TEST_USER_ID",
    "OTHER_USER_ID",
    "make_test_user_id",
    # Factories
    "create_test_folder",
    "create_test_prompt",
]
