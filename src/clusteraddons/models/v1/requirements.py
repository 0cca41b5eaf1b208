"""Hardware requirements and static metadata of add-on operators."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

__all__ = [
    "HostTypeHardwareRequirements",
    "HostTypeHardwareRequirementsWrapper",
    "MonitoredOperator",
    "OperatorHardwareRequirements",
    "OperatorProperty",
    "OperatorType",
    "Requirement",
]


class Requirement(BaseModel):
    """Quantitative requirements an operator places on a host.

    A value of `None` means the requirement is not configured and is not
    checked. This is deliberately distinct from zero, which is a configured
    requirement that every host satisfies.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    cpu_cores: Annotated[
        int | None,
        Field(title="CPU cores", description="Required CPU cores", ge=0),
    ] = None

    ram_mib: Annotated[
        int | None,
        Field(title="RAM", description="Required memory in MiB", ge=0),
    ] = None

    minimum_disk_count: Annotated[
        int,
        Field(
            title="Minimum disk count",
            description="Number of eligible non-installation disks required",
            ge=0,
        ),
    ] = 1

    qualitative_notes: Annotated[
        tuple[str, ...],
        Field(
            title="Qualitative notes",
            description="Human-readable requirements on the host's disks",
        ),
    ] = ()


class HostTypeHardwareRequirements(BaseModel):
    """Requirements for hosts of one role."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    quantitative: Annotated[
        Requirement, Field(title="Quantitative requirements")
    ] = Requirement(minimum_disk_count=0)

    qualitative: Annotated[
        tuple[str, ...],
        Field(
            title="Qualitative requirements",
            description="Human-readable requirements that are not numeric",
        ),
    ] = ()


class HostTypeHardwareRequirementsWrapper(BaseModel):
    """Requirements split by host role."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    master: Annotated[
        HostTypeHardwareRequirements, Field(title="Control plane hosts")
    ] = HostTypeHardwareRequirements()

    worker: Annotated[
        HostTypeHardwareRequirements, Field(title="Worker hosts")
    ] = HostTypeHardwareRequirements()


class OperatorHardwareRequirements(BaseModel):
    """Preflight hardware requirements of an operator.

    These are the requirements that can be determined from the cluster alone,
    before any host has reported its inventory.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    operator_name: Annotated[str, Field(title="Operator name")]

    dependencies: Annotated[
        tuple[str, ...],
        Field(
            title="Dependencies",
            description="Names of operators that must be installed first",
        ),
    ] = ()

    requirements: Annotated[
        HostTypeHardwareRequirementsWrapper,
        Field(title="Requirements by host role"),
    ] = HostTypeHardwareRequirementsWrapper()


class OperatorType(str, Enum):
    """How an operator is installed."""

    BUILTIN = "builtin"
    OLM = "olm"


class OperatorProperty(BaseModel):
    """A user-settable property of an operator."""

    model_config = ConfigDict(frozen=True)

    name: str

    data_type: str

    mandatory: bool = False

    description: str = ""

    default_value: str | None = None


class MonitoredOperator(BaseModel):
    """Static metadata used to monitor an installed operator."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    name: Annotated[str, Field(title="Operator name", examples=["lvm"])]

    operator_type: Annotated[
        OperatorType, Field(title="Operator type")
    ] = OperatorType.OLM

    namespace: Annotated[
        str,
        Field(
            title="Namespace",
            description="Namespace the operator is installed into",
            examples=["openshift-storage"],
        ),
    ]

    subscription_name: Annotated[
        str,
        Field(
            title="Subscription name",
            description="Name of the OLM subscription for the operator",
            examples=["lvms-operator"],
        ),
    ]

    timeout_seconds: Annotated[
        int,
        Field(
            title="Install timeout",
            description="How long to wait for the operator to become ready",
            gt=0,
        ),
    ]
