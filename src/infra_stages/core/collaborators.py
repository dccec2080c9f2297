"""
Collaborator shapes.

The provisioning clients (Terraform, Packer, cloud APIs) live outside this
package. Test drivers adapt them to these interfaces; option objects and
their retry settings are handed over untouched.
"""

from abc import ABC, abstractmethod
from typing import Any


class InfrastructureBackend(ABC):
    """Applies and destroys a deployment described by an options object."""

    @abstractmethod
    def apply(self, options: Any) -> None:
        """Create or update the deployment. Must be idempotent."""
        pass

    @abstractmethod
    def destroy(self, options: Any) -> None:
        """Tear the deployment down. Must be idempotent."""
        pass

    @abstractmethod
    def output(self, options: Any, name: str) -> str:
        """Read a named output value of the deployment."""
        pass


class ImageBuilder(ABC):
    """Builds a machine image and returns its artifact id."""

    @abstractmethod
    def build(self, options: Any) -> str:
        pass
