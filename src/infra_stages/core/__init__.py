"""Stage control for infra-stages."""

from .collaborators import ImageBuilder, InfrastructureBackend
from .stage_runner import StageRunner, parse_bool
from .workdir import copy_folder_to_temp

__all__ = [
    "StageRunner",
    "parse_bool",
    "copy_folder_to_temp",
    "InfrastructureBackend",
    "ImageBuilder",
]
