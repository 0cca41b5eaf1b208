"""Host hardware inventory as reported by the discovery agent."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Self, override

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "Cpu",
    "Disk",
    "DriveType",
    "Inventory",
    "Memory",
]


class DriveType(str, Enum):
    """Type of a drive as reported by the discovery agent."""

    HDD = "HDD"
    SSD = "SSD"
    ODD = "ODD"
    MULTIPATH = "Multipath"
    FC = "FC"
    ISCSI = "iSCSI"
    LVM = "LVM"
    RAID = "RAID"
    ECKD = "ECKD"
    ECKD_ESE = "ECKD (ESE)"
    FBA = "FBA"
    UNKNOWN = "Unknown"

    @override
    @classmethod
    def _missing_(cls, value: object) -> Self:
        # New agents may report drive types we have never heard of. They are
        # never eligible for storage, so treat them as unknown rather than
        # rejecting the whole inventory.
        return cls.UNKNOWN


class Disk(BaseModel):
    """A single block device on a host."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Annotated[
        str,
        Field(
            title="Disk ID",
            description="Stable identifier of the disk",
            examples=["/dev/disk/by-id/wwn-0x5002538e40b9f0a2"],
        ),
    ]

    size_bytes: Annotated[
        int, Field(title="Size", description="Size of disk in bytes", ge=0)
    ] = 0

    drive_type: Annotated[
        DriveType,
        Field(title="Drive type", examples=[DriveType.SSD]),
    ] = DriveType.UNKNOWN

    @field_validator("drive_type", mode="before")
    @classmethod
    def _validate_drive_type(cls, v: object) -> object:
        if isinstance(v, str):
            return DriveType(v)
        return v


class Cpu(BaseModel):
    """CPU section of a host inventory."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    count: Annotated[
        int, Field(title="CPU count", description="Number of cores", ge=0)
    ] = 0


class Memory(BaseModel):
    """Memory section of a host inventory."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    usable_bytes: Annotated[
        int,
        Field(
            title="Usable memory",
            description="Memory available to the operating system in bytes",
            ge=0,
        ),
    ] = 0


class Inventory(BaseModel):
    """Snapshot of the hardware of one host.

    Only the parts of the inventory that add-on validation looks at are
    modeled. Everything else the discovery agent reports is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    cpu: Annotated[Cpu, Field(title="CPU")] = Cpu()

    memory: Annotated[Memory, Field(title="Memory")] = Memory()

    disks: Annotated[
        tuple[Disk, ...], Field(title="Disks attached to the host")
    ] = ()

    @property
    def cpu_core_count(self) -> int:
        """Number of CPU cores on the host."""
        return self.cpu.count

    @property
    def usable_memory_bytes(self) -> int:
        """Usable memory on the host in bytes."""
        return self.memory.usable_bytes
