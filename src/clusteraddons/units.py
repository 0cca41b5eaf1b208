"""Unit conversions shared by requirement and inventory calculations."""

from __future__ import annotations

import bitmath

__all__ = ["bytes_to_mib", "mib_to_bytes"]


def mib_to_bytes(mib: int) -> int:
    """Convert a number of mebibytes to a number of bytes.

    Parameters
    ----------
    mib
        Amount of memory in MiB.

    Returns
    -------
    int
        Equivalent number of bytes.
    """
    return int(bitmath.MiB(mib).bytes)


def bytes_to_mib(size: int) -> int:
    """Convert a number of bytes to whole mebibytes, rounding down.

    Parameters
    ----------
    size
        Amount of memory in bytes.

    Returns
    -------
    int
        Equivalent number of complete MiB.
    """
    return int(bitmath.Byte(size).to_MiB().value)
