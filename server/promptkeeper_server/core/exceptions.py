"""Error types raised by the Promptkeeper core."""

from typing import Optional


class PromptkeeperError(Exception):
    """Base class for all Promptkeeper errors."""
    pass


class Unauthenticated(PromptkeeperError):
    """Raised when no valid user identity is available."""
    pass


class NotFound(PromptkeeperError):
    """Raised when a row does not exist or is not owned by the caller."""
    pass


class FolderNotFound(NotFound):
    """Raised when a folder is missing or owned by someone else."""
    pass


class PromptNotFound(NotFound):
    """Raised when a prompt is missing or owned by someone else."""
    pass


class InvalidReference(PromptkeeperError):
    """Raised when a folder_id does not resolve to a folder owned by the caller."""
    pass


class ConstraintViolation(PromptkeeperError):
    """Raised when the storage layer rejects a write."""
    pass


class ConfigurationError(PromptkeeperError):
    """Raised when required configuration is missing."""
    pass


class ExternalServiceFailure(PromptkeeperError):
    """Raised when the identity service is unreachable or rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
