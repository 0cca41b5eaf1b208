"""Rendering of operator installation manifests."""

from __future__ import annotations

from ..constants import MANIFEST_PREFIX
from ..models.v1.requirements import MonitoredOperator
from ..templates import templates

__all__ = ["ManifestRenderer", "OperatorManifests"]

type OperatorManifests = tuple[dict[str, bytes], bytes]
"""Named manifests and the cluster-scoped custom resource document."""


class ManifestRenderer:
    """Render the manifests that install an OLM operator.

    Parameters
    ----------
    operator
        Static metadata of the operator.
    source
        Catalog source to install the operator from.
    starting_csv
        Cluster service version to start the subscription at, if any.
    custom_resource
        Name of the template for the cluster-scoped custom resource.
    """

    def __init__(
        self,
        operator: MonitoredOperator,
        *,
        source: str,
        starting_csv: str | None = None,
        custom_resource: str,
    ) -> None:
        self._operator = operator
        self._source = source
        self._starting_csv = starting_csv
        self._custom_resource = custom_resource

    def render(self) -> OperatorManifests:
        """Render all manifests for the operator.

        Returns
        -------
        OperatorManifests
            Mapping of file names to the subscription, namespace, and operator
            group manifests, and the separately-applied custom resource.

        Raises
        ------
        jinja2.TemplateError
            Raised if a template cannot be loaded or rendered.
        """
        base = f"{MANIFEST_PREFIX}{self._operator.name}"
        manifests = {
            f"{base}_subscription.yaml": self._render("subscription.yaml"),
            f"{base}_ns.yaml": self._render("namespace.yaml"),
            f"{base}_operator_group.yaml": self._render("operator_group.yaml"),
        }
        return manifests, self._render(self._custom_resource)

    def _render(self, name: str) -> bytes:
        template = templates.get_template(name)
        content = template.render(
            OPERATOR_NAMESPACE=self._operator.namespace,
            OPERATOR_SUBSCRIPTION_NAME=self._operator.subscription_name,
            OPERATOR_SOURCE=self._source,
            OPERATOR_STARTING_CSV=self._starting_csv,
        )
        return content.encode()
