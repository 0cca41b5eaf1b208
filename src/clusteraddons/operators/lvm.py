"""LVM storage operator plugin.

The LVM operator provides local storage on single-node clusters. It shipped
first as the ODF LVM operator and was later renamed, and both variants are
still installable. They share one implementation configured by an
`OperatorPolicy`.
"""

from __future__ import annotations

from dataclasses import dataclass

from structlog.stdlib import BoundLogger, get_logger

from ..config import LvmConfig, OdfLvmConfig, OperatorRequirementsConfig
from ..constants import (
    LVM_CLUSTER_VALIDATION_ID,
    LVM_HOST_VALIDATION_ID,
    LVM_MIN_OPENSHIFT_VERSION,
    ODF_LVM_CLUSTER_VALIDATION_ID,
    ODF_LVM_HOST_VALIDATION_ID,
    OPERATOR_SOURCE,
    ROOT_LOGGER,
    STORAGE_NAMESPACE,
)
from ..models.domain.cluster import ClusterContext, Host
from ..models.v1.requirements import (
    MonitoredOperator,
    OperatorHardwareRequirements,
    OperatorProperty,
    OperatorType,
    Requirement,
)
from ..models.v1.validation import ValidationResult
from ..services.manifests import ManifestRenderer, OperatorManifests
from ..services.requirements import ConfiguredRequirementCalculator
from ..services.validator import OperatorValidator, ValidationPolicy

__all__ = [
    "LVM_POLICY",
    "ODF_LVM_POLICY",
    "LvmOperator",
    "OperatorPolicy",
]


@dataclass(frozen=True)
class OperatorPolicy:
    """Everything that differs between variants of the LVM operator."""

    operator: MonitoredOperator
    """Static metadata of the operator."""

    validation: ValidationPolicy
    """Settings for cluster and host validation."""

    config_class: type[OperatorRequirementsConfig]
    """Settings class holding the per-host requirements."""

    starting_csv: str | None = None
    """Cluster service version to pin the subscription to, if any."""

    custom_resource_template: str = "lvmcluster.yaml"
    """Template of the cluster-scoped custom resource."""

    @property
    def qualitative_requirements(self) -> tuple[str, ...]:
        """Human-readable disk requirements of the operator."""
        count = self.validation.minimum_disk_count
        description = self.validation.disk_description
        disks = "disk" if count == 1 else "disks"
        return (
            f"At least {count} {description} {disks} with no partitions or"
            " filesystems",
        )


LVM_POLICY = OperatorPolicy(
    operator=MonitoredOperator(
        name="lvm",
        operator_type=OperatorType.OLM,
        namespace=STORAGE_NAMESPACE,
        subscription_name="odf-lvm-operator",
        timeout_seconds=30 * 60,
    ),
    validation=ValidationPolicy(
        display_name="ODF LVM",
        cluster_validation_id=LVM_CLUSTER_VALIDATION_ID,
        host_validation_id=LVM_HOST_VALIDATION_ID,
        minimum_version=LVM_MIN_OPENSHIFT_VERSION,
        disk_description="non-installation",
    ),
    config_class=LvmConfig,
)
"""The current LVM operator."""

ODF_LVM_POLICY = OperatorPolicy(
    operator=MonitoredOperator(
        name="odflvm",
        operator_type=OperatorType.OLM,
        namespace=STORAGE_NAMESPACE,
        subscription_name="odf-lvm-operator",
        timeout_seconds=70 * 60,
    ),
    validation=ValidationPolicy(
        display_name="ODF LVM",
        cluster_validation_id=ODF_LVM_CLUSTER_VALIDATION_ID,
        host_validation_id=ODF_LVM_HOST_VALIDATION_ID,
        disk_description="non-bootable",
    ),
    config_class=OdfLvmConfig,
    starting_csv="odf-lvm-operator.v4.10.0",
)
"""The legacy ODF LVM operator, which predates the version check."""


class LvmOperator:
    """Installation plugin for an LVM storage operator.

    Parameters
    ----------
    policy
        Which variant of the operator this is.
    config
        Per-host requirements. If not given, they are read from the
        environment using the policy's settings class.
    logger
        Logger to use. If not given, the package logger is used.
    """

    def __init__(
        self,
        policy: OperatorPolicy = LVM_POLICY,
        *,
        config: OperatorRequirementsConfig | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._policy = policy
        if config is None:
            config = policy.config_class()
        if logger is None:
            logger = get_logger(ROOT_LOGGER)
        self._config = config
        self._logger = logger.bind(operator=policy.operator.name)
        self._calculator = ConfiguredRequirementCalculator(
            self._config,
            policy.qualitative_requirements,
            self._logger,
            minimum_disk_count=policy.validation.minimum_disk_count,
        )
        self._validator = OperatorValidator(
            policy.validation, self._calculator, self._logger
        )
        self._renderer = ManifestRenderer(
            policy.operator,
            source=OPERATOR_SOURCE,
            starting_csv=policy.starting_csv,
            custom_resource=policy.custom_resource_template,
        )

    @property
    def name(self) -> str:
        """Unique name of the operator."""
        return self._policy.operator.name

    @property
    def cluster_validation_id(self) -> str:
        """Identifier of the operator's cluster validation."""
        return self._policy.validation.cluster_validation_id

    @property
    def host_validation_id(self) -> str:
        """Identifier of the operator's host validation."""
        return self._policy.validation.host_validation_id

    def get_dependencies(self, cluster: ClusterContext) -> list[str]:
        """Return the names of operators that must be installed first.

        The LVM operator has no dependencies.
        """
        return []

    def validate_cluster(self, cluster: ClusterContext) -> ValidationResult:
        """Validate that the cluster is a supported single-node cluster."""
        return self._validator.validate_cluster(cluster)

    def validate_host(
        self, cluster: ClusterContext, host: Host
    ) -> ValidationResult:
        """Validate the disks, CPU, and memory of a host."""
        return self._validator.validate_host(cluster, host)

    def generate_manifests(self, cluster: ClusterContext) -> OperatorManifests:
        """Render the manifests that install the operator."""
        self._logger.debug("Generating manifests", cluster=cluster.id)
        return self._renderer.render()

    def get_host_requirements(
        self, cluster: ClusterContext, host: Host
    ) -> Requirement:
        """Return the operator's requirements for a host.

        All hosts of a single-node cluster are control plane hosts, so this
        is always the control plane requirement.
        """
        preflight = self.get_preflight_requirements(cluster)
        return preflight.requirements.master.quantitative

    def get_preflight_requirements(
        self, cluster: ClusterContext
    ) -> OperatorHardwareRequirements:
        """Return requirements that can be determined from the cluster."""
        return OperatorHardwareRequirements(
            operator_name=self.name,
            dependencies=tuple(self.get_dependencies(cluster)),
            requirements=self._calculator.preflight(cluster),
        )

    def get_monitored_operator(self) -> MonitoredOperator:
        """Return static metadata used to monitor the operator."""
        return self._policy.operator

    def get_properties(self) -> list[OperatorProperty]:
        """Return the user-settable properties of the operator.

        The LVM operator has none.
        """
        return []
