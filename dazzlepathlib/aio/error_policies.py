"""
Error handling policies for the async walker.

When a stat or listing fails on a queued path, the walker hands the error
to a policy. A policy that returns lets the walk continue with that path
skipped; a policy that raises aborts the walk.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors
    that occur during filesystem operations.
    """

    @abstractmethod
    async def handle(self, error: Exception, operation: str, path: str) -> None:
        """
        Handle an error that occurred during a filesystem operation.

        Args:
            error: The exception that was raised
            operation: Name of the operation that failed ('stat' or 'list_children')
            path: The path being processed when the error occurred

        Raises:
            Exception: To abort the walk (usually ``error`` itself)
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, aborting the walk.

    This is the default: a failed stat or listing ends the walk with that
    failure and the completion callback never fires.
    """

    async def handle(self, error: Exception, operation: str, path: str) -> None:
        """Re-raise the error immediately."""
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that records errors and lets the walk continue.

    The failing path is skipped (a directory that cannot be listed is
    treated as empty). Errors are kept for later inspection.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every error
        """
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []
        self.verbose = verbose

    async def handle(self, error: Exception, operation: str, path: str) -> None:
        """Record the error and skip the path."""
        self.errors.append({
            'path': path,
            'operation': operation,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        self.skipped_paths.append(path)

        if self.verbose:
            if isinstance(error, PermissionError):
                logger.warning("Skipping inaccessible path '%s': %s", path, error)
            else:
                logger.warning("Error in %s for '%s': %s", operation, path, error)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for e in self.errors if e['error_type'] == 'PermissionError'),
            'not_found_errors': sum(1 for e in self.errors if e['error_type'] == 'FileNotFoundError'),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }


class ThresholdPolicy(ContinueOnErrorsPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails fast.

    Useful when some errors are expected but too many indicate
    a systemic problem that should halt the walk.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Number of errors tolerated before aborting
            verbose: If True, log a warning for every tolerated error
        """
        super().__init__(verbose=verbose)
        self.max_errors = max_errors

    async def handle(self, error: Exception, operation: str, path: str) -> None:
        """Record the error, aborting once more than ``max_errors`` occurred."""
        await super().handle(error, operation, path)
        if len(self.errors) > self.max_errors:
            logger.error("Error threshold of %d exceeded, aborting walk", self.max_errors)
            raise error
