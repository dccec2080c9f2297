"""
Typed helpers over the Named File Store.

Each helper binds a value shape to a logical key. Option objects and
identifiers use one fixed key each, since a Working Directory holds at most
one of them at a time; plain strings and ints use a caller-chosen name.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..models import (
    Ec2KeyPair,
    KubectlOptions,
    PackerOptions,
    SshHostOptions,
    SshKeyPair,
    TerraformOptions,
)
from .file_store import NamedFileStore

NAMED_KEY_PREFIX = "named."

TERRAFORM_OPTIONS_KEY = "TerraformOptions"
PACKER_OPTIONS_KEY = "PackerOptions"
SSH_HOST_OPTIONS_KEY = "SshHostOptions"
KUBECTL_OPTIONS_KEY = "KubectlOptions"
AMI_ID_KEY = "AMI"
ARTIFACT_ID_KEY = "Artifact"
SSH_KEY_PAIR_KEY = "SshKeyPair"
EC2_KEY_PAIR_KEY = "Ec2KeyPair"


def named_key(name: str) -> str:
    """Logical key for a caller-named value."""
    if not name:
        raise ValueError("Name of a saved value must be a non-empty string")
    return f"{NAMED_KEY_PREFIX}{name}"


class StageValues:
    """
    Save/load/cleanup helpers for the values test stages share.

    Example:
        values = StageValues(NamedFileStore())
        values.save_ami_id(working_dir, ami_id)
        ...
        ami_id = values.load_ami_id(working_dir)
    """

    def __init__(self, store: NamedFileStore | None = None):
        self.store = store or NamedFileStore()

    def is_present(self, working_dir: Path | str, key: str) -> bool:
        """Check whether meaningful data is saved under a raw logical key."""
        return self.store.exists(working_dir, key)

    # ========== Named values ==========

    def save_string(self, working_dir: Path | str, name: str, value: str) -> None:
        self.store.save(working_dir, named_key(name), value)

    def load_string(self, working_dir: Path | str, name: str) -> str:
        return self.store.load(working_dir, named_key(name), str)

    def save_int(self, working_dir: Path | str, name: str, value: int) -> None:
        self.store.save(working_dir, named_key(name), value)

    def load_int(self, working_dir: Path | str, name: str) -> int:
        return self.store.load(working_dir, named_key(name), int)

    def cleanup_named(self, working_dir: Path | str, name: str) -> None:
        self.store.remove(working_dir, named_key(name))

    # ========== Terraform options ==========

    def save_terraform_options(self, working_dir: Path | str, options: TerraformOptions) -> None:
        self.store.save(working_dir, TERRAFORM_OPTIONS_KEY, options)

    def save_terraform_options_if_not_present(
        self, working_dir: Path | str, options: TerraformOptions
    ) -> None:
        """Save options unless an earlier run of the stage already saved some."""
        self.store.save(working_dir, TERRAFORM_OPTIONS_KEY, options, overwrite=False)

    def load_terraform_options(self, working_dir: Path | str) -> TerraformOptions:
        return self.store.load(working_dir, TERRAFORM_OPTIONS_KEY, TerraformOptions)

    def cleanup_terraform_options(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, TERRAFORM_OPTIONS_KEY)

    # ========== Packer options ==========

    def save_packer_options(self, working_dir: Path | str, options: PackerOptions) -> None:
        self.store.save(working_dir, PACKER_OPTIONS_KEY, options)

    def load_packer_options(self, working_dir: Path | str) -> PackerOptions:
        return self.store.load(working_dir, PACKER_OPTIONS_KEY, PackerOptions)

    def cleanup_packer_options(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, PACKER_OPTIONS_KEY)

    # ========== SSH host options ==========

    def save_ssh_host_options(self, working_dir: Path | str, options: SshHostOptions) -> None:
        self.store.save(working_dir, SSH_HOST_OPTIONS_KEY, options)

    def load_ssh_host_options(self, working_dir: Path | str) -> SshHostOptions:
        return self.store.load(working_dir, SSH_HOST_OPTIONS_KEY, SshHostOptions)

    def cleanup_ssh_host_options(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, SSH_HOST_OPTIONS_KEY)

    # ========== Kubectl options ==========

    def save_kubectl_options(self, working_dir: Path | str, options: KubectlOptions) -> None:
        self.store.save(working_dir, KUBECTL_OPTIONS_KEY, options)

    def load_kubectl_options(self, working_dir: Path | str) -> KubectlOptions:
        return self.store.load(working_dir, KUBECTL_OPTIONS_KEY, KubectlOptions)

    def cleanup_kubectl_options(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, KUBECTL_OPTIONS_KEY)

    # ========== Identifiers ==========

    def save_ami_id(self, working_dir: Path | str, ami_id: str) -> None:
        self.store.save(working_dir, AMI_ID_KEY, ami_id)

    def load_ami_id(self, working_dir: Path | str) -> str:
        return self.store.load(working_dir, AMI_ID_KEY, str)

    def cleanup_ami_id(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, AMI_ID_KEY)

    def save_artifact_id(self, working_dir: Path | str, artifact_id: str) -> None:
        self.store.save(working_dir, ARTIFACT_ID_KEY, artifact_id)

    def load_artifact_id(self, working_dir: Path | str) -> str:
        return self.store.load(working_dir, ARTIFACT_ID_KEY, str)

    def cleanup_artifact_id(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, ARTIFACT_ID_KEY)

    # ========== Credentials ==========
    # The store logs paths only; these values must never be passed to a log sink.

    def save_ssh_key_pair(self, working_dir: Path | str, key_pair: SshKeyPair) -> None:
        self.store.save(working_dir, SSH_KEY_PAIR_KEY, key_pair)

    def load_ssh_key_pair(self, working_dir: Path | str) -> SshKeyPair:
        return self.store.load(working_dir, SSH_KEY_PAIR_KEY, SshKeyPair)

    def cleanup_ssh_key_pair(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, SSH_KEY_PAIR_KEY)

    def save_ec2_key_pair(self, working_dir: Path | str, key_pair: Ec2KeyPair) -> None:
        self.store.save(working_dir, EC2_KEY_PAIR_KEY, key_pair)

    def load_ec2_key_pair(self, working_dir: Path | str) -> Ec2KeyPair:
        return self.store.load(working_dir, EC2_KEY_PAIR_KEY, Ec2KeyPair)

    def cleanup_ec2_key_pair(self, working_dir: Path | str) -> None:
        self.store.remove(working_dir, EC2_KEY_PAIR_KEY)

    # ========== Generic ==========

    def save_value(
        self, working_dir: Path | str, key: str, value: Any, overwrite: bool = True
    ) -> None:
        """Save any encodable value under a raw logical key."""
        self.store.save(working_dir, key, value, overwrite=overwrite)

    def load_value(self, working_dir: Path | str, key: str, shape: Any = Any) -> Any:
        """Load a value saved with save_value(), checked against shape."""
        return self.store.load(working_dir, key, shape)
