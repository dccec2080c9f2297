"""
infra-stages State Module

Contains the persistence layer for test data:
- serializer: JSON encode/decode with shape checks, shallow emptiness test
- NamedFileStore: one file per logical key inside a Working Directory
- StageValues: typed save/load/cleanup helpers bound to well-known keys
"""

from .file_store import NamedFileStore
from .serializer import decode, encode, is_empty_encoding
from .typed_values import (
    AMI_ID_KEY,
    ARTIFACT_ID_KEY,
    EC2_KEY_PAIR_KEY,
    KUBECTL_OPTIONS_KEY,
    PACKER_OPTIONS_KEY,
    SSH_HOST_OPTIONS_KEY,
    SSH_KEY_PAIR_KEY,
    TERRAFORM_OPTIONS_KEY,
    StageValues,
    named_key,
)

__all__ = [
    "NamedFileStore",
    "StageValues",
    "named_key",
    "encode",
    "decode",
    "is_empty_encoding",
    # Well-known keys
    "TERRAFORM_OPTIONS_KEY",
    "PACKER_OPTIONS_KEY",
    "SSH_HOST_OPTIONS_KEY",
    "KUBECTL_OPTIONS_KEY",
    "AMI_ID_KEY",
    "ARTIFACT_ID_KEY",
    "SSH_KEY_PAIR_KEY",
    "EC2_KEY_PAIR_KEY",
]
