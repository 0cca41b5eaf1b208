"""Hardware requirement calculation for storage operators."""

from __future__ import annotations

from typing import Protocol

from structlog.stdlib import BoundLogger

from ..config import OperatorRequirementsConfig
from ..models.domain.cluster import ClusterContext
from ..models.v1.requirements import (
    HostTypeHardwareRequirements,
    HostTypeHardwareRequirementsWrapper,
    Requirement,
)

__all__ = ["ConfiguredRequirementCalculator", "RequirementCalculator"]


class RequirementCalculator(Protocol):
    """Computes the per-host requirements of an operator for a cluster.

    Implementations may raise `~clusteraddons.exceptions.RequirementsError`
    if the requirements cannot be determined.
    """

    def compute(self, cluster: ClusterContext) -> Requirement:
        """Compute the requirements for control plane hosts."""

    def preflight(
        self, cluster: ClusterContext
    ) -> HostTypeHardwareRequirementsWrapper:
        """Compute the requirements for every host role."""


class ConfiguredRequirementCalculator:
    """Requirements taken directly from operator configuration.

    The requirements do not currently depend on the cluster, but the cluster
    is passed in so that they can be scaled by topology later without
    changing callers.

    Parameters
    ----------
    config
        Configured per-host requirements.
    qualitative
        Human-readable requirements on the host's disks.
    logger
        Logger to use.
    minimum_disk_count
        Number of eligible disks each host needs.
    """

    def __init__(
        self,
        config: OperatorRequirementsConfig,
        qualitative: tuple[str, ...],
        logger: BoundLogger,
        *,
        minimum_disk_count: int = 1,
    ) -> None:
        self._config = config
        self._qualitative = qualitative
        self._minimum_disk_count = minimum_disk_count
        self._logger = logger

    def compute(self, cluster: ClusterContext) -> Requirement:
        """Compute the requirements for control plane hosts.

        Parameters
        ----------
        cluster
            Cluster the operator will be installed on.

        Returns
        -------
        Requirement
            Requirements for each control plane host. Requirements that are
            not configured are `None`.
        """
        cpu = self._config.cpu_cores_per_host
        ram = self._config.ram_mib_per_host
        if cpu is None:
            self._logger.warning(
                "CPU requirement not configured", cluster=cluster.id
            )
        if ram is None:
            self._logger.warning(
                "Memory requirement not configured", cluster=cluster.id
            )
        return Requirement(
            cpu_cores=cpu,
            ram_mib=ram,
            minimum_disk_count=self._minimum_disk_count,
            qualitative_notes=self._qualitative,
        )

    def preflight(
        self, cluster: ClusterContext
    ) -> HostTypeHardwareRequirementsWrapper:
        """Compute the requirements for every host role.

        Storage is only provided on single-node clusters, so only control
        plane hosts have requirements.

        Parameters
        ----------
        cluster
            Cluster the operator will be installed on.

        Returns
        -------
        HostTypeHardwareRequirementsWrapper
            Requirements split by host role.
        """
        requirement = self.compute(cluster)
        master = HostTypeHardwareRequirements(
            quantitative=requirement, qualitative=self._qualitative
        )
        return HostTypeHardwareRequirementsWrapper(master=master)
