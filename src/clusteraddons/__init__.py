"""Readiness validation for optional cluster add-on operators."""

from importlib.metadata import PackageNotFoundError, version

from .orchestrator import ReadinessOrchestrator
from .registry import OperatorRegistry

__all__ = ["OperatorRegistry", "ReadinessOrchestrator", "__version__"]


__version__: str
"""The application version string (PEP 440 / SemVer compatible)."""

try:
    __version__ = version("cluster-addons")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"
