"""
Working-folder helpers.

Tests usually copy their Terraform code into a temp folder so that parallel
runs do not share state files. When stages are being skipped, the copy must
be skipped too, or the test data saved by the earlier run would not be found.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from ..logsink import LogSink, default_sink
from .stage_runner import StageRunner

# Hidden files that Terraform needs to see in the copy.
KEEP_HIDDEN = frozenset({".terraform-version", ".terraform.lock.hcl"})


def _ignore_local_state(directory: str, names: list[str]) -> set[str]:
    ignored = set()
    for name in names:
        if name.startswith(".") and name not in KEEP_HIDDEN:
            ignored.add(name)
        elif name.endswith((".tfstate", ".tfstate.backup")) or name == "terraform.tfstate.d":
            ignored.add(name)
    return ignored


def copy_folder_to_temp(
    root_folder: Path | str,
    relative_folder: Path | str,
    temp_prefix: str = "infra-stages",
    runner: StageRunner | None = None,
    logger: LogSink | None = None,
) -> Path:
    """
    Copy a folder tree into a fresh temp folder.

    The whole root_folder is copied (so relative module sources keep
    resolving) without hidden files and local Terraform state.

    Args:
        root_folder: Root of the tree to copy
        relative_folder: Folder inside root_folder the test works in
        temp_prefix: Prefix for the temp folder name
        runner: Stage runner consulted for skip variables
        logger: Sink for diagnostic messages

    Returns:
        relative_folder inside the copy, or inside root_folder unchanged
        when any stage is being skipped.

    Raises:
        FileNotFoundError: If root_folder/relative_folder does not exist
    """
    logger = logger or default_sink()
    runner = runner or StageRunner(logger=logger)

    root = Path(root_folder).resolve()
    source = root / relative_folder
    if not source.is_dir():
        raise FileNotFoundError(f"Folder {source} does not exist")

    if runner.skip_stage_env_var_set():
        logger.logf(
            "A stage is being skipped, so using the original folder %s instead of a copy", source
        )
        return source

    tmp_root = Path(tempfile.mkdtemp(prefix=f"{temp_prefix}-"))
    destination = tmp_root / root.name
    shutil.copytree(root, destination, ignore=_ignore_local_state)

    logger.logf("Copied %s to %s", root, destination)
    return destination / relative_folder
