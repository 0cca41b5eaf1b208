"""Global constants."""

from pathlib import Path

__all__ = [
    "ALERT_HOOK_ENV_VAR",
    "APPLICATION_NAME",
    "CONFIG_FILE",
    "CONFIG_FILE_ENV_VAR",
    "ENV_PREFIX",
    "LVM_CLUSTER_VALIDATION_ID",
    "LVM_HOST_VALIDATION_ID",
    "LVM_MIN_OPENSHIFT_VERSION",
    "MANIFEST_PREFIX",
    "ODF_LVM_CLUSTER_VALIDATION_ID",
    "ODF_LVM_HOST_VALIDATION_ID",
    "OPERATOR_SOURCE",
    "ROOT_LOGGER",
    "STORAGE_NAMESPACE",
]

CONFIG_FILE = Path("/etc/clusteraddons/config.yaml")
"""Default path to the application configuration."""

ENV_PREFIX = "CLUSTERADDONS_"
"""Prefix for environment variables overriding application configuration."""

CONFIG_FILE_ENV_VAR = f"{ENV_PREFIX}CONFIG_FILE"
"""Environment variable that, if set, overrides the configuration path."""

ALERT_HOOK_ENV_VAR = f"{ENV_PREFIX}ALERT_HOOK"
"""Environment variable holding the Slack webhook used for alerts."""

APPLICATION_NAME = "Cluster add-on validation"
"""Name of the application used in Slack alerts."""

ROOT_LOGGER = "clusteraddons"
"""Name of the logger used when no logger is passed in."""

LVM_MIN_OPENSHIFT_VERSION = "4.12.0"
"""Oldest OpenShift release supported by the LVM operator."""

LVM_CLUSTER_VALIDATION_ID = "lvm-requirements-satisfied"
"""Cluster validation ID of the LVM operator."""

LVM_HOST_VALIDATION_ID = "lvm-requirements-satisfied"
"""Host validation ID of the LVM operator.

Cluster and host validations live in separate namespaces, so they share the
same identifier.
"""

ODF_LVM_CLUSTER_VALIDATION_ID = "odf-lvm-requirements-satisfied"
"""Cluster validation ID of the legacy ODF LVM operator."""

ODF_LVM_HOST_VALIDATION_ID = "odf-lvm-requirements-satisfied"
"""Host validation ID of the legacy ODF LVM operator."""

MANIFEST_PREFIX = "50_openshift-"
"""Prefix of generated manifest file names, which controls apply order."""

OPERATOR_SOURCE = "redhat-operators"
"""Catalog source from which storage operators are installed."""

STORAGE_NAMESPACE = "openshift-storage"
"""Namespace into which storage operators are installed."""
