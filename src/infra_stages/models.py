"""
Option and credential models persisted between test stages.

These mirror the option objects handed to the provisioning collaborators
(Terraform, Packer, SSH, kubectl). The store treats them as plain data:
retry settings are carried through untouched and interpreted only by the
collaborators.

Secret fields (private keys, passwords) are excluded from repr() so that a
model can be formatted into a log line without leaking them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _from_record(cls, data: Dict[str, Any]):
    """
    Build a model from a decoded record.

    Field names and types are checked against the dataclass annotations;
    unknown or missing fields and mistyped values raise DecodingError.
    """
    from .state.serializer import from_mapping

    return from_mapping(cls, data)


@dataclass
class RetrySettings:
    """
    Retry configuration passed through to a collaborator.

    Attributes:
        retryable_errors: Map of error-text regex to a human-readable reason
        max_retries: Maximum retry attempts
        time_between_retries: Seconds to wait between attempts
    """

    retryable_errors: Dict[str, str] = field(default_factory=dict)
    max_retries: int = 0
    time_between_retries: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "retryable_errors": dict(self.retryable_errors),
            "max_retries": self.max_retries,
            "time_between_retries": self.time_between_retries,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RetrySettings":
        return _from_record(cls, data)


@dataclass
class TerraformOptions:
    """
    Options for deploying infrastructure with Terraform.

    Attributes:
        terraform_dir: Folder holding the Terraform code
        vars: Values passed with -var
        var_files: Files passed with -var-file
        env_vars: Extra environment variables for the terraform process
        backend_config: Values passed with -backend-config
        no_color: Whether to pass -no-color
        retry: Retry settings for intermittent errors
    """

    terraform_dir: str
    vars: Dict[str, Any] = field(default_factory=dict)
    var_files: List[str] = field(default_factory=list)
    env_vars: Dict[str, str] = field(default_factory=dict)
    backend_config: Dict[str, Any] = field(default_factory=dict)
    no_color: bool = False
    retry: Optional[RetrySettings] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "terraform_dir": self.terraform_dir,
            "vars": self.vars,
            "var_files": list(self.var_files),
            "env_vars": dict(self.env_vars),
            "backend_config": self.backend_config,
            "no_color": self.no_color,
            "retry": self.retry.to_dict() if self.retry else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TerraformOptions":
        return _from_record(cls, data)


@dataclass
class PackerOptions:
    """
    Options for building a machine image with Packer.

    Attributes:
        template: Path to the Packer template
        vars: Values passed with -var
        var_files: Files passed with -var-file
        only: Restrict the build to this builder (empty for all)
        env: Extra environment variables for the packer process
        retry: Retry settings for intermittent errors
    """

    template: str
    vars: Dict[str, str] = field(default_factory=dict)
    var_files: List[str] = field(default_factory=list)
    only: str = ""
    env: Dict[str, str] = field(default_factory=dict)
    retry: Optional[RetrySettings] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template": self.template,
            "vars": dict(self.vars),
            "var_files": list(self.var_files),
            "only": self.only,
            "env": dict(self.env),
            "retry": self.retry.to_dict() if self.retry else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackerOptions":
        return _from_record(cls, data)


@dataclass
class SshKeyPair:
    """An SSH key pair in OpenSSH/PEM text form."""

    public_key: str
    private_key: str = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "public_key": self.public_key,
            "private_key": self.private_key,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SshKeyPair":
        return _from_record(cls, data)


@dataclass
class Ec2KeyPair:
    """
    A key pair registered with EC2.

    Attributes:
        key_pair: The underlying SSH key pair (secret)
        name: Name the key pair is registered under
        region: Region the key pair lives in
    """

    key_pair: SshKeyPair
    name: str
    region: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key_pair": self.key_pair.to_dict(),
            "name": self.name,
            "region": self.region,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Ec2KeyPair":
        return _from_record(cls, data)


@dataclass
class SshHostOptions:
    """
    Connection options for running commands on a remote host.

    Attributes:
        hostname: Host name or IP address
        ssh_user: Login user
        custom_port: SSH port
        ssh_agent: Authenticate through the local SSH agent
        ssh_key_pair: Key pair used to authenticate (secret)
        password: Password used to authenticate (secret)
    """

    hostname: str
    ssh_user: str
    custom_port: int = 22
    ssh_agent: bool = False
    ssh_key_pair: Optional[SshKeyPair] = field(default=None, repr=False)
    password: str = field(default="", repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hostname": self.hostname,
            "ssh_user": self.ssh_user,
            "custom_port": self.custom_port,
            "ssh_agent": self.ssh_agent,
            "ssh_key_pair": self.ssh_key_pair.to_dict() if self.ssh_key_pair else None,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SshHostOptions":
        return _from_record(cls, data)


@dataclass
class KubectlOptions:
    """
    Options for talking to a Kubernetes cluster through kubectl.

    Attributes:
        context_name: kubeconfig context to use (empty for current)
        config_path: Path to the kubeconfig file
        namespace: Namespace commands run against
        env: Extra environment variables for the kubectl process
    """

    context_name: str = ""
    config_path: str = ""
    namespace: str = "default"
    env: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "context_name": self.context_name,
            "config_path": self.config_path,
            "namespace": self.namespace,
            "env": dict(self.env),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KubectlOptions":
        return _from_record(cls, data)
