"""Interface implemented by every add-on operator plugin."""

from __future__ import annotations

from typing import Protocol

from ..models.domain.cluster import ClusterContext, Host
from ..models.v1.requirements import (
    MonitoredOperator,
    OperatorHardwareRequirements,
    OperatorProperty,
    Requirement,
)
from ..models.v1.validation import ValidationResult
from ..services.manifests import OperatorManifests

__all__ = ["Operator"]


class Operator(Protocol):
    """An installable add-on operator.

    The orchestrator only interacts with operators through this interface and
    never inspects their concrete type.
    """

    @property
    def name(self) -> str:
        """Unique name of the operator."""

    @property
    def cluster_validation_id(self) -> str:
        """Identifier of the operator's cluster validation."""

    @property
    def host_validation_id(self) -> str:
        """Identifier of the operator's host validation."""

    def get_dependencies(self, cluster: ClusterContext) -> list[str]:
        """Return the names of operators that must be installed first."""

    def validate_cluster(self, cluster: ClusterContext) -> ValidationResult:
        """Validate that the cluster can run the operator."""

    def validate_host(
        self, cluster: ClusterContext, host: Host
    ) -> ValidationResult:
        """Validate that a host satisfies the operator's requirements.

        May raise `~clusteraddons.exceptions.ValidatorError` if the host data
        is malformed.
        """

    def generate_manifests(self, cluster: ClusterContext) -> OperatorManifests:
        """Render the manifests that install the operator."""

    def get_host_requirements(
        self, cluster: ClusterContext, host: Host
    ) -> Requirement:
        """Return the operator's requirements for a host."""

    def get_preflight_requirements(
        self, cluster: ClusterContext
    ) -> OperatorHardwareRequirements:
        """Return requirements that can be determined from the cluster."""

    def get_monitored_operator(self) -> MonitoredOperator:
        """Return static metadata used to monitor the operator."""

    def get_properties(self) -> list[OperatorProperty]:
        """Return the user-settable properties of the operator."""
