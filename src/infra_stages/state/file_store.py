#!/usr/bin/env python3
"""
Named File Store for infra-stages

Persists one JSON record per logical key under the test's Working Directory,
so that separate test stages (possibly separate processes) can hand values
to each other:

    <working_dir>/.test-data/<quoted key>.json

Writes go to a temporary file in the same directory and are moved into
place with os.replace(), so a concurrent reader never sees a half-written
record. There is no cross-process locking: parallel test runs must use
distinct Working Directories.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import quote, unquote
from uuid import uuid4

from ..config import StageConfig
from ..exceptions import DecodingError, NotFoundError, TestDataError
from ..logsink import LogSink, default_sink
from .serializer import decode, encode, is_empty_encoding

T = TypeVar("T")

RECORD_SUFFIX = ".json"
_TMP_SUFFIX = ".tmp"


class NamedFileStore:
    """
    Key/value store backed by one file per key.

    Attributes:
        config: Store settings (data directory name, JSON indentation)
        logger: Sink for diagnostic messages
    """

    def __init__(self, config: StageConfig | None = None, logger: LogSink | None = None):
        self.config = config or StageConfig()
        self.logger = logger or default_sink()

    # ========== Paths ==========

    def data_dir(self, working_dir: Path | str) -> Path:
        """Directory holding the records of a Working Directory."""
        return Path(working_dir) / self.config.data_dir_name

    def path_for(self, working_dir: Path | str, key: str) -> Path:
        """
        Resolve the file path of a logical key.

        The key is percent-quoted, so it always maps to a single file name
        inside the data directory and distinct keys never share a file.

        Raises:
            ValueError: If the key is empty
        """
        if not key:
            raise ValueError("Test data key must be a non-empty string")
        return self.data_dir(working_dir) / f"{quote(key, safe='')}{RECORD_SUFFIX}"

    # ========== Operations ==========

    def exists(self, working_dir: Path | str, key: str) -> bool:
        """
        Check whether meaningful data has been saved under a key.

        A record that encodes an empty value (null, false, 0, {} or []) is
        reported the same as a missing one. Use has_record() for strict
        existence.
        """
        path = self.path_for(working_dir, key)
        if not path.is_file():
            return False

        data = path.read_bytes()
        try:
            return not is_empty_encoding(data)
        except DecodingError as e:
            raise e.with_context(key, working_dir, path) from e

    def has_record(self, working_dir: Path | str, key: str) -> bool:
        """Check whether a record file exists, whatever it contains."""
        return self.path_for(working_dir, key).is_file()

    def save(
        self,
        working_dir: Path | str,
        key: str,
        value: Any,
        overwrite: bool = True,
    ) -> None:
        """
        Save a value under a key.

        Args:
            working_dir: Working Directory of the test run
            key: Logical key
            value: Value to encode
            overwrite: If False and a non-empty record already exists, keep
                it and return without error. A missing or empty record
                (see exists()) is written as usual.

        Raises:
            EncodingError: If the value cannot be encoded
            DecodingError: If overwrite is False and the existing record is malformed
            OSError: If the record cannot be written
        """
        path = self.path_for(working_dir, key)

        if not overwrite and self.exists(working_dir, key):
            self.logger.logf(
                "Test data already exists in file %s and overwrite is disabled, so not saving", path
            )
            return

        try:
            data = encode(value, indent=self.config.json_indent)
        except TestDataError as e:
            raise e.with_context(key, working_dir, path) from e

        self.logger.logf("Storing test data in %s so it can be reused later", path)
        self._atomic_write(path, data)

    def load(self, working_dir: Path | str, key: str, shape: type[T] | Any = Any) -> T:
        """
        Load the value saved under a key.

        Args:
            working_dir: Working Directory of the test run
            key: Logical key
            shape: Expected shape of the value (see serializer.decode)

        Returns:
            Decoded value

        Raises:
            NotFoundError: If nothing was saved under the key
            DecodingError: If the record is malformed or has another shape
        """
        path = self.path_for(working_dir, key)
        if not path.is_file():
            raise NotFoundError(
                f"No test data saved under key {key!r} in {working_dir}; "
                "was the stage that saves it skipped or run against another directory?",
                key=key,
                working_dir=working_dir,
                path=path,
            )

        self.logger.logf("Loading test data from %s", path)
        data = path.read_bytes()
        try:
            return decode(data, shape)
        except DecodingError as e:
            raise e.with_context(key, working_dir, path) from e

    def remove(self, working_dir: Path | str, key: str) -> None:
        """Delete the record saved under a key. Missing records are ignored."""
        path = self.path_for(working_dir, key)
        self.logger.logf("Cleaning up test data from %s", path)
        path.unlink(missing_ok=True)

    def keys(self, working_dir: Path | str) -> list[str]:
        """List the keys that currently have a record, sorted. Foreign files are ignored."""
        data_dir = self.data_dir(working_dir)
        if not data_dir.is_dir():
            return []

        keys = []
        for entry in data_dir.iterdir():
            if not entry.is_file() or not entry.name.endswith(RECORD_SUFFIX):
                continue
            key = unquote(entry.name[: -len(RECORD_SUFFIX)])
            # Files not written by save() would alias another key.
            if key and self.path_for(working_dir, key).name == entry.name:
                keys.append(key)
        return sorted(keys)

    def clear(self, working_dir: Path | str) -> None:
        """
        Remove every record of a Working Directory.

        The data directory is removed when nothing else is left in it; the
        Working Directory itself is never touched.
        """
        for key in self.keys(working_dir):
            self.remove(working_dir, key)

        data_dir = self.data_dir(working_dir)
        if data_dir.is_dir() and not any(data_dir.iterdir()):
            data_dir.rmdir()

    # ========== Internals ==========

    def _atomic_write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_name(f"{path.name}.{uuid4().hex}{_TMP_SUFFIX}")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
