"""
Exception types for infra-stages.

Every test-data failure carries the logical key, the Working Directory and
the resolved file path, so a misconfigured run (wrong directory, stale data,
a stage skipped out of order) can be diagnosed from the message alone.
"""

from __future__ import annotations

from pathlib import Path


class TestDataError(Exception):
    """Base exception for test-data store errors."""

    __test__ = False

    def __init__(
        self,
        message: str,
        key: str | None = None,
        working_dir: Path | str | None = None,
        path: Path | str | None = None,
    ):
        """
        Initialize a test-data error.

        Args:
            message: Error message
            key: Logical key of the record involved (if known)
            working_dir: Working Directory the record belongs to (if known)
            path: Resolved file path of the record (if known)
        """
        super().__init__(message)
        self.key = key
        self.working_dir = Path(working_dir) if working_dir is not None else None
        self.path = Path(path) if path is not None else None

    def with_context(
        self,
        key: str,
        working_dir: Path | str,
        path: Path | str,
    ) -> "TestDataError":
        """Return a copy of this error bound to a specific record."""
        return type(self)(
            f"{self} (key={key!r}, working_dir={str(working_dir)!r}, path={str(path)!r})",
            key=key,
            working_dir=working_dir,
            path=path,
        )


class EncodingError(TestDataError):
    """Raised when a value cannot be converted to the stored representation."""
    pass


class DecodingError(TestDataError):
    """Raised when stored bytes do not match the expected shape."""
    pass


class NotFoundError(TestDataError):
    """Raised when a record is loaded that was never saved."""
    pass


class ConfigError(ValueError):
    """Raised when a configuration file or value is malformed."""
    pass
