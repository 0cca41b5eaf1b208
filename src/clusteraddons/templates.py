"""Template management.

Provides a shared Jinja template environment used whenever operator manifests
are generated.
"""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, StrictUndefined

__all__ = ["templates"]

templates = Environment(
    loader=PackageLoader("clusteraddons", package_path="templates"),
    autoescape=False,  # noqa: S701 (output is YAML, not HTML)
    undefined=StrictUndefined,
)
"""The template environment."""
