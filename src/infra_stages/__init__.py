"""
infra-stages - test data and stage control for infrastructure integration tests

Integration tests that provision real infrastructure are slow: build an
image, deploy it, validate it, tear it all down. infra-stages splits such a
test into named stages that can be skipped individually, and lets stages
hand values to each other through files in the test's Working Directory.

Example usage:
    from infra_stages import StageRunner, StageValues

    runner = StageRunner()
    values = StageValues()

    runner.run_stage("build_ami", lambda: values.save_ami_id(working_dir, build_ami()))
    runner.run_stage("deploy", lambda: deploy(values.load_ami_id(working_dir)))

    # SKIP_build_ami=true re-runs only the deploy stage, reusing the saved AMI id.
"""

__version__ = "0.3.0"

from .config import ConfigLoader, StageConfig, load_config
from .core import (
    ImageBuilder,
    InfrastructureBackend,
    StageRunner,
    copy_folder_to_temp,
    parse_bool,
)
from .exceptions import (
    ConfigError,
    DecodingError,
    EncodingError,
    NotFoundError,
    TestDataError,
)
from .logsink import LoggingSink, LogSink, NullSink, default_sink
from .models import (
    Ec2KeyPair,
    KubectlOptions,
    PackerOptions,
    RetrySettings,
    SshHostOptions,
    SshKeyPair,
    TerraformOptions,
)
from .state import NamedFileStore, StageValues, decode, encode, is_empty_encoding
from .summary import build_summary_table, print_summary

__all__ = [
    "__version__",
    # Configuration
    "StageConfig",
    "ConfigLoader",
    "load_config",
    # Errors
    "TestDataError",
    "EncodingError",
    "DecodingError",
    "NotFoundError",
    "ConfigError",
    # Logging
    "LogSink",
    "LoggingSink",
    "NullSink",
    "default_sink",
    # Models
    "RetrySettings",
    "TerraformOptions",
    "PackerOptions",
    "SshKeyPair",
    "Ec2KeyPair",
    "SshHostOptions",
    "KubectlOptions",
    # State
    "NamedFileStore",
    "StageValues",
    "encode",
    "decode",
    "is_empty_encoding",
    # Stages
    "StageRunner",
    "parse_bool",
    "copy_folder_to_temp",
    "InfrastructureBackend",
    "ImageBuilder",
    # Summary
    "build_summary_table",
    "print_summary",
]
