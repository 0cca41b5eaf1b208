"""Cluster and host state consumed by add-on validation."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "ClusterContext",
    "HighAvailabilityMode",
    "Host",
    "HostRef",
    "HostRole",
]


class HighAvailabilityMode(str, Enum):
    """Control plane topology of a cluster."""

    FULL = "Full"
    NONE = "None"


class HostRole(str, Enum):
    """Role a host plays in the cluster."""

    AUTO_ASSIGN = "auto-assign"
    MASTER = "master"
    WORKER = "worker"
    BOOTSTRAP = "bootstrap"


class HostRef(BaseModel):
    """Reference to a host that is part of a cluster."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    id: Annotated[str, Field(title="Host ID")]

    role: Annotated[HostRole, Field(title="Host role")] = (
        HostRole.AUTO_ASSIGN
    )


class Host(HostRef):
    """A host being validated.

    The inventory is kept in the serialized form in which the discovery agent
    reported it. It is only parsed during host validation so that a malformed
    inventory is reported as a validation failure rather than rejected here.
    """

    inventory: Annotated[
        str | None,
        Field(
            title="Inventory",
            description=(
                "JSON hardware inventory. `None` or empty if the discovery"
                " agent has not reported yet."
            ),
        ),
    ] = None

    installation_disk_id: Annotated[
        str | None,
        Field(
            title="Installation disk",
            description="ID of the disk the operating system is installed on",
            examples=["/dev/disk/by-id/wwn-0x5002538e40b9f0a2"],
        ),
    ] = None

    @property
    def has_inventory(self) -> bool:
        """Whether the discovery agent has reported an inventory."""
        return bool(self.inventory)


class ClusterContext(BaseModel):
    """The parts of a cluster relevant to add-on validation."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    id: Annotated[str, Field(title="Cluster ID")]

    high_availability_mode: Annotated[
        HighAvailabilityMode,
        Field(
            title="High availability mode",
            description=(
                "``None`` for single-node clusters, ``Full`` for clusters"
                " with a highly-available control plane"
            ),
        ),
    ] = HighAvailabilityMode.FULL

    hosts: Annotated[
        tuple[HostRef, ...], Field(title="Hosts in the cluster")
    ] = ()

    platform_version: Annotated[
        str,
        Field(
            title="Platform version",
            description="OpenShift version the cluster will run",
            examples=["4.14.3"],
        ),
    ]

    @property
    def is_single_node(self) -> bool:
        """Whether this is a single-node cluster."""
        return self.high_availability_mode == HighAvailabilityMode.NONE
