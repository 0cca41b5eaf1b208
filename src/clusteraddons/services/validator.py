"""Cluster and host validation for storage operators."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import ValidationError
from semver import Version
from structlog.stdlib import BoundLogger

from ..exceptions import (
    HostRequirementsError,
    InventoryParseError,
    RequirementsError,
)
from ..models.domain.cluster import ClusterContext, Host
from ..models.domain.inventory import DriveType, Inventory
from ..models.v1.validation import ValidationResult
from ..units import bytes_to_mib, mib_to_bytes
from .disks import STORAGE_DRIVE_TYPES, count_eligible_disks
from .requirements import RequirementCalculator

__all__ = ["OperatorValidator", "ValidationPolicy", "parse_version"]


@dataclass(frozen=True)
class ValidationPolicy:
    """Settings that distinguish variants of a storage operator validator."""

    display_name: str
    """Name of the operator as shown in validation messages."""

    cluster_validation_id: str
    """Identifier of the cluster validation."""

    host_validation_id: str
    """Identifier of the host validation."""

    minimum_version: str | None = None
    """Oldest supported platform version, or `None` for no version check."""

    disk_description: str = "non-installation"
    """How the required spare disk is described to the user."""

    minimum_disk_count: int = 1
    """Number of eligible disks each host needs."""

    drive_types: frozenset[DriveType] = STORAGE_DRIVE_TYPES
    """Drive types that count as eligible disks."""


def parse_version(version: str) -> Version:
    """Parse a platform version.

    Parameters
    ----------
    version
        Version string. The minor and patch versions may be omitted.

    Returns
    -------
    semver.Version
        Parsed version.

    Raises
    ------
    ValueError
        Raised if the string is not a valid semantic version.
    """
    return Version.parse(version, optional_minor_and_patch=True)


class OperatorValidator:
    """Decides whether a storage operator can be installed.

    Each check runs in a fixed order and the first failure is returned. No
    state is kept between calls.

    Parameters
    ----------
    policy
        Variant-specific settings.
    calculator
        Source of host requirements.
    logger
        Logger to use.
    """

    def __init__(
        self,
        policy: ValidationPolicy,
        calculator: RequirementCalculator,
        logger: BoundLogger,
    ) -> None:
        self._policy = policy
        self._calculator = calculator
        self._logger = logger

    def validate_cluster(self, cluster: ClusterContext) -> ValidationResult:
        """Validate the cluster topology and version.

        Parameters
        ----------
        cluster
            Cluster the operator would be installed on.

        Returns
        -------
        ValidationResult
            Result of the cluster validation. A platform version that cannot
            be parsed is reported as a failure.
        """
        policy = self._policy
        validation_id = policy.cluster_validation_id
        logger = self._logger.bind(
            cluster=cluster.id, validation=validation_id
        )

        if not cluster.is_single_node:
            msg = (
                f"{policy.display_name} operator is only supported for"
                " Single Node Openshift deployment"
            )
            logger.info("Cluster validation failed", reason=msg)
            return ValidationResult.failure(validation_id, msg)

        if policy.minimum_version:
            try:
                version = parse_version(cluster.platform_version)
                minimum = parse_version(policy.minimum_version)
            except ValueError as e:
                logger.info("Cannot parse platform version", error=str(e))
                return ValidationResult.failure(validation_id, str(e))
            if version < minimum:
                msg = (
                    f"{policy.display_name} operator is only supported for"
                    f" openshift versions {policy.minimum_version} and above"
                )
                logger.info("Cluster validation failed", reason=msg)
                return ValidationResult.failure(validation_id, msg)

        logger.debug("Cluster validation succeeded")
        return ValidationResult.success(validation_id)

    def validate_host(
        self, cluster: ClusterContext, host: Host
    ) -> ValidationResult:
        """Validate the hardware of one host.

        Parameters
        ----------
        cluster
            Cluster the host belongs to.
        host
            Host to validate.

        Returns
        -------
        ValidationResult
            Result of the host validation. The status is pending if the host
            has not reported its inventory yet.

        Raises
        ------
        HostRequirementsError
            Raised if the requirements of the operator could not be
            determined. The failed result is attached to the exception.
        InventoryParseError
            Raised if the host inventory is malformed. The failed result is
            attached to the exception.
        """
        policy = self._policy
        validation_id = policy.host_validation_id
        logger = self._logger.bind(
            cluster=cluster.id, host=host.id, validation=validation_id
        )

        if not host.has_inventory:
            msg = "Missing Inventory in the host"
            logger.debug("Host inventory not yet available")
            return ValidationResult.pending(validation_id, msg)

        try:
            inventory = Inventory.model_validate_json(host.inventory or "")
        except ValidationError as e:
            msg = "Failed to get inventory from host"
            result = ValidationResult.failure(validation_id, msg)
            raise InventoryParseError(
                f"{msg} {host.id}: {e}", result=result, host_id=host.id
            ) from e

        disk_count = count_eligible_disks(
            inventory.disks, host.installation_disk_id, policy.drive_types
        )
        minimum = policy.minimum_disk_count
        if disk_count < minimum:
            if minimum == 1:
                wanted = f"one {policy.disk_description} disk"
            else:
                wanted = f"{minimum} {policy.disk_description} disks"
            msg = (
                f"Insufficient disks, {policy.display_name} requires at least"
                f" {wanted} on the host"
            )
            logger.info("Host validation failed", reason=msg)
            return ValidationResult.failure(validation_id, msg)

        try:
            requirements = self._calculator.compute(cluster)
        except RequirementsError as e:
            msg = (
                "Failed to get the host requirements for host with id"
                f" {host.id}"
            )
            logger.exception("Cannot compute host requirements")
            result = ValidationResult.failure(validation_id, msg, str(e))
            raise HostRequirementsError(
                msg, result=result, host_id=host.id
            ) from e

        cpu = requirements.cpu_cores
        if cpu is not None and inventory.cpu_core_count < cpu:
            msg = (
                f"Insufficient CPU to deploy {policy.display_name}. The"
                f" required CPU count is {cpu} but found"
                f" {inventory.cpu_core_count}"
            )
            logger.info("Host validation failed", reason=msg)
            return ValidationResult.failure(validation_id, msg)

        memory = requirements.ram_mib
        if memory is not None:
            if inventory.usable_memory_bytes < mib_to_bytes(memory):
                usable = bytes_to_mib(inventory.usable_memory_bytes)
                msg = (
                    f"Insufficient memory to deploy {policy.display_name}."
                    f" The required memory is {memory} MiB but found"
                    f" {usable} MiB"
                )
                logger.info("Host validation failed", reason=msg)
                return ValidationResult.failure(validation_id, msg)

        logger.debug("Host validation succeeded")
        return ValidationResult.success(validation_id)
