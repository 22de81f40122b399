"""Core business logic"""

from .exceptions import (
    PromptkeeperError,
    Unauthenticated,
    NotFound,
    FolderNotFound,
    PromptNotFound,
    InvalidReference,
    ConstraintViolation,
    ConfigurationError,
    ExternalServiceFailure,
)
from .folder_manager import Folder, FolderManager
from .prompt_manager import Prompt, PromptManager

__all__ = [
    "PromptkeeperError",
    "Unauthenticated",
    "NotFound",
    "FolderNotFound",
    "PromptNotFound",
    "InvalidReference",
    "ConstraintViolation",
    "ConfigurationError",
    "ExternalServiceFailure",
    "Folder",
    "FolderManager",
    "Prompt",
    "PromptManager",
]
