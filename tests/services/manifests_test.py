"""Tests for manifest rendering."""

from __future__ import annotations

import yaml

from clusteraddons.models.v1.requirements import MonitoredOperator
from clusteraddons.services.manifests import ManifestRenderer

OPERATOR = MonitoredOperator(
    name="lvm",
    namespace="openshift-storage",
    subscription_name="lvms-operator",
    timeout_seconds=1800,
)


def test_render() -> None:
    renderer = ManifestRenderer(
        OPERATOR, source="redhat-operators", custom_resource="lvmcluster.yaml"
    )
    named, custom_resource = renderer.render()
    assert sorted(named) == [
        "50_openshift-lvm_ns.yaml",
        "50_openshift-lvm_operator_group.yaml",
        "50_openshift-lvm_subscription.yaml",
    ]

    subscription = yaml.safe_load(named["50_openshift-lvm_subscription.yaml"])
    assert subscription == {
        "apiVersion": "operators.coreos.com/v1alpha1",
        "kind": "Subscription",
        "metadata": {
            "name": "lvms-operator",
            "namespace": "openshift-storage",
        },
        "spec": {
            "installPlanApproval": "Automatic",
            "name": "lvms-operator",
            "source": "redhat-operators",
            "sourceNamespace": "openshift-marketplace",
        },
    }

    namespace = yaml.safe_load(named["50_openshift-lvm_ns.yaml"])
    assert namespace["kind"] == "Namespace"
    assert namespace["metadata"]["name"] == "openshift-storage"
    labels = namespace["metadata"]["labels"]
    assert labels["openshift.io/cluster-monitoring"] == "true"

    group = yaml.safe_load(named["50_openshift-lvm_operator_group.yaml"])
    assert group["kind"] == "OperatorGroup"
    assert group["metadata"] == {
        "name": "openshift-storage-operatorgroup",
        "namespace": "openshift-storage",
    }
    assert group["spec"]["targetNamespaces"] == ["openshift-storage"]

    cluster = yaml.safe_load(custom_resource)
    assert cluster["apiVersion"] == "lvm.topolvm.io/v1alpha1"
    assert cluster["kind"] == "LVMCluster"
    assert cluster["metadata"] == {
        "name": "lvmcluster",
        "namespace": "openshift-storage",
    }
    device_classes = cluster["spec"]["storage"]["deviceClasses"]
    assert [c["name"] for c in device_classes] == ["vg1"]


def test_render_starting_csv() -> None:
    renderer = ManifestRenderer(
        OPERATOR,
        source="redhat-operators",
        starting_csv="odf-lvm-operator.v4.10.0",
        custom_resource="lvmcluster.yaml",
    )
    named, _ = renderer.render()
    subscription = yaml.safe_load(named["50_openshift-lvm_subscription.yaml"])
    assert subscription["spec"]["startingCSV"] == "odf-lvm-operator.v4.10.0"
    assert subscription["spec"]["sourceNamespace"] == "openshift-marketplace"


def test_render_stable() -> None:
    renderer = ManifestRenderer(
        OPERATOR, source="redhat-operators", custom_resource="lvmcluster.yaml"
    )
    assert renderer.render() == renderer.render()
