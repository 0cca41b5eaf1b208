"""Selection of disks usable for add-on storage."""

from __future__ import annotations

from collections.abc import Iterable

from ..models.domain.inventory import Disk, DriveType

__all__ = [
    "STORAGE_DRIVE_TYPES",
    "count_eligible_disks",
    "is_eligible_disk",
]

STORAGE_DRIVE_TYPES = frozenset({DriveType.HDD, DriveType.SSD})
"""Drive types that may be added to an add-on storage pool."""


def is_eligible_disk(
    disk: Disk,
    installation_disk_id: str | None,
    drive_types: frozenset[DriveType] = STORAGE_DRIVE_TYPES,
) -> bool:
    """Determine whether a disk can be used for add-on storage.

    Parameters
    ----------
    disk
        Disk to check.
    installation_disk_id
        ID of the disk the operating system is installed on, which is
        reserved.
    drive_types
        Drive types that are usable.

    Returns
    -------
    bool
        `True` if the disk is of a usable type, is not empty, and is not the
        installation disk.
    """
    return (
        disk.drive_type in drive_types
        and disk.size_bytes != 0
        and disk.id != installation_disk_id
    )


def count_eligible_disks(
    disks: Iterable[Disk],
    installation_disk_id: str | None,
    drive_types: frozenset[DriveType] = STORAGE_DRIVE_TYPES,
) -> int:
    """Count the disks that can be used for add-on storage.

    Ineligible disks are skipped rather than reported. Whether the remaining
    count is sufficient is left to the caller.

    Parameters
    ----------
    disks
        Disks reported in the host inventory.
    installation_disk_id
        ID of the disk the operating system is installed on.
    drive_types
        Drive types that are usable.

    Returns
    -------
    int
        Number of eligible disks.
    """
    return sum(
        1
        for disk in disks
        if is_eligible_disk(disk, installation_disk_id, drive_types)
    )
