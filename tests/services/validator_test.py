"""Tests for cluster and host validation."""

from __future__ import annotations

from dataclasses import replace

import pytest
from structlog.stdlib import BoundLogger

from clusteraddons.config import LvmConfig
from clusteraddons.exceptions import (
    HostRequirementsError,
    InventoryParseError,
    RequirementsError,
)
from clusteraddons.models.domain.cluster import (
    ClusterContext,
    HighAvailabilityMode,
    Host,
)
from clusteraddons.models.v1.requirements import (
    HostTypeHardwareRequirementsWrapper,
    Requirement,
)
from clusteraddons.models.v1.validation import (
    ValidationResult,
    ValidationStatus,
)
from clusteraddons.services.requirements import (
    ConfiguredRequirementCalculator,
)
from clusteraddons.services.validator import (
    OperatorValidator,
    ValidationPolicy,
    parse_version,
)

from ..support.inventory import (
    DISK_ID_1,
    DISK_ID_2,
    GB,
    GIB,
    MIB,
    make_disk,
    make_host,
)

POLICY = ValidationPolicy(
    display_name="ODF LVM",
    cluster_validation_id="lvm-cluster",
    host_validation_id="lvm-host",
    minimum_version="4.12.0",
)


class BrokenCalculator:
    """Requirement calculator that always fails."""

    def compute(self, cluster: ClusterContext) -> Requirement:
        raise RequirementsError("requirements unavailable")

    def preflight(
        self, cluster: ClusterContext
    ) -> HostTypeHardwareRequirementsWrapper:
        raise RequirementsError("requirements unavailable")


@pytest.fixture
def validator(logger: BoundLogger) -> OperatorValidator:
    config = LvmConfig(cpu_cores_per_host=1, ram_mib_per_host=1200)
    calculator = ConfiguredRequirementCalculator(config, (), logger)
    return OperatorValidator(POLICY, calculator, logger)


def make_cluster(
    mode: HighAvailabilityMode = HighAvailabilityMode.NONE,
    version: str = "4.12.0",
) -> ClusterContext:
    return ClusterContext(
        id="cluster", high_availability_mode=mode, platform_version=version
    )


def test_parse_version() -> None:
    assert parse_version("4.12") == parse_version("4.12.0")
    assert parse_version("4.9.0") < parse_version("4.12.0")
    with pytest.raises(ValueError, match="not valid SemVer"):
        parse_version("four")


def test_cluster_full_ha(validator: OperatorValidator) -> None:
    cluster = make_cluster(HighAvailabilityMode.FULL)
    assert validator.validate_cluster(cluster) == ValidationResult.failure(
        "lvm-cluster",
        "ODF LVM operator is only supported for Single Node Openshift"
        " deployment",
    )

    # Topology is checked before the version.
    cluster = make_cluster(HighAvailabilityMode.FULL, "not-a-version")
    result = validator.validate_cluster(cluster)
    assert result.status == ValidationStatus.FAILURE
    assert "Single Node" in result.reasons[0]


def test_cluster_version(validator: OperatorValidator) -> None:
    result = validator.validate_cluster(make_cluster(version="4.10.0"))
    assert result == ValidationResult.failure(
        "lvm-cluster",
        "ODF LVM operator is only supported for openshift versions 4.12.0"
        " and above",
    )

    # Versions must be compared numerically, not as strings.
    result = validator.validate_cluster(make_cluster(version="4.9.0"))
    assert result.status == ValidationStatus.FAILURE

    for version in ("4.12.0", "4.12", "4.13.2", "5.0.0"):
        result = validator.validate_cluster(make_cluster(version=version))
        assert result == ValidationResult.success("lvm-cluster")

    # Validation keeps no state between calls.
    for cluster in (make_cluster(version="4.10.0"), make_cluster()):
        first = validator.validate_cluster(cluster)
        assert validator.validate_cluster(cluster) == first


def test_cluster_bad_version(validator: OperatorValidator) -> None:
    result = validator.validate_cluster(make_cluster(version="latest"))
    assert result.status == ValidationStatus.FAILURE
    assert result.validation_id == "lvm-cluster"
    assert len(result.reasons) == 1
    assert "latest" in result.reasons[0]


def test_cluster_no_minimum_version(logger: BoundLogger) -> None:
    policy = ValidationPolicy(
        display_name="ODF LVM",
        cluster_validation_id="odflvm-cluster",
        host_validation_id="odflvm-host",
    )
    calculator = ConfiguredRequirementCalculator(LvmConfig(), (), logger)
    validator = OperatorValidator(policy, calculator, logger)

    result = validator.validate_cluster(make_cluster(version="4.10.0"))
    assert result == ValidationResult.success("odflvm-cluster")
    result = validator.validate_cluster(make_cluster(version="latest"))
    assert result == ValidationResult.success("odflvm-cluster")
    cluster = make_cluster(HighAvailabilityMode.FULL)
    result = validator.validate_cluster(cluster)
    assert result.status == ValidationStatus.FAILURE


def test_host_no_inventory(validator: OperatorValidator) -> None:
    cluster = make_cluster()
    for inventory in (None, ""):
        host = Host(id="host", inventory=inventory)
        assert validator.validate_host(cluster, host) == (
            ValidationResult.pending(
                "lvm-host", "Missing Inventory in the host"
            )
        )


def test_host_bad_inventory(validator: OperatorValidator) -> None:
    cluster = make_cluster()
    for inventory in ("{not json", "[]", '{"cpu": {"count": -1}}'):
        host = Host(id="host", inventory=inventory)
        with pytest.raises(InventoryParseError) as excinfo:
            validator.validate_host(cluster, host)
        assert excinfo.value.host_id == "host"
        assert excinfo.value.result == ValidationResult.failure(
            "lvm-host", "Failed to get inventory from host"
        )


def test_host_insufficient_disks(validator: OperatorValidator) -> None:
    cluster = make_cluster()
    expected = ValidationResult.failure(
        "lvm-host",
        "Insufficient disks, ODF LVM requires at least one non-installation"
        " disk on the host",
    )
    hosts = [
        make_host(disks=[]),
        make_host(
            installation_disk_id=DISK_ID_1,
            disks=[make_disk(DISK_ID_1, 20 * GB, "HDD")],
        ),
        make_host(
            installation_disk_id=DISK_ID_1,
            disks=[
                make_disk(DISK_ID_1, 20 * GB, "HDD"),
                make_disk(DISK_ID_2, 0, "SSD"),
                make_disk("/dev/sr0", 4 * GB, "ODD"),
            ],
        ),
    ]
    for host in hosts:
        assert validator.validate_host(cluster, host) == expected

    # Disks are checked before CPU and memory.
    host = make_host(cpus=0, ram=0, disks=[])
    assert validator.validate_host(cluster, host) == expected


def test_host_minimum_disk_count(
    logger: BoundLogger, sufficient_host: Host
) -> None:
    policy = replace(POLICY, minimum_disk_count=2)
    calculator = ConfiguredRequirementCalculator(LvmConfig(), (), logger)
    validator = OperatorValidator(policy, calculator, logger)
    result = validator.validate_host(make_cluster(), sufficient_host)
    assert result == ValidationResult.failure(
        "lvm-host",
        "Insufficient disks, ODF LVM requires at least 2 non-installation"
        " disks on the host",
    )

    host = make_host(
        installation_disk_id=DISK_ID_1,
        disks=[
            make_disk(DISK_ID_1, 20 * GB, "HDD"),
            make_disk(DISK_ID_2, 40 * GB, "SSD"),
            make_disk("/dev/sdc", 40 * GB, "HDD"),
        ],
    )
    result = validator.validate_host(make_cluster(), host)
    assert result == ValidationResult.success("lvm-host")


def test_host_insufficient_cpu(
    validator: OperatorValidator, sufficient_host: Host
) -> None:
    assert sufficient_host.inventory
    inventory = sufficient_host.inventory.replace('"count": 12', '"count": 0')
    host = sufficient_host.model_copy(update={"inventory": inventory})
    result = validator.validate_host(make_cluster(), host)
    assert result == ValidationResult.failure(
        "lvm-host",
        "Insufficient CPU to deploy ODF LVM. The required CPU count is 1 but"
        " found 0",
    )


def test_host_insufficient_memory(validator: OperatorValidator) -> None:
    disks = [
        make_disk(DISK_ID_1, 20 * GB, "HDD"),
        make_disk(DISK_ID_2, 40 * GB, "SSD"),
    ]
    host = make_host(
        ram=1199 * MIB, disks=disks, installation_disk_id=DISK_ID_1
    )
    result = validator.validate_host(make_cluster(), host)
    assert result == ValidationResult.failure(
        "lvm-host",
        "Insufficient memory to deploy ODF LVM. The required memory is 1200"
        " MiB but found 1199 MiB",
    )

    # Exactly meeting the requirement is sufficient.
    host = make_host(
        cpus=1, ram=1200 * MIB, disks=disks, installation_disk_id=DISK_ID_1
    )
    result = validator.validate_host(make_cluster(), host)
    assert result == ValidationResult.success("lvm-host")


def test_host_sufficient(
    validator: OperatorValidator, sufficient_host: Host
) -> None:
    cluster = make_cluster()
    expected = ValidationResult.success("lvm-host")
    assert validator.validate_host(cluster, sufficient_host) == expected

    # Validation keeps no state between calls.
    assert validator.validate_host(cluster, sufficient_host) == expected

    host = make_host(
        cpus=12,
        ram=32 * GIB,
        disks=[make_disk(DISK_ID_2, 50 * GB, "SSD")],
        installation_disk_id=DISK_ID_1,
    )
    assert validator.validate_host(cluster, host) == expected


def test_host_unconfigured_requirements(logger: BoundLogger) -> None:
    config = LvmConfig(cpu_cores_per_host=None, ram_mib_per_host=None)
    calculator = ConfiguredRequirementCalculator(config, (), logger)
    validator = OperatorValidator(POLICY, calculator, logger)
    host = make_host(
        cpus=0, ram=0, disks=[make_disk(DISK_ID_2, 40 * GB, "HDD")]
    )
    result = validator.validate_host(make_cluster(), host)
    assert result == ValidationResult.success("lvm-host")


def test_host_requirements_error(logger: BoundLogger) -> None:
    validator = OperatorValidator(POLICY, BrokenCalculator(), logger)
    host = make_host(disks=[make_disk(DISK_ID_2, 40 * GB, "HDD")])
    with pytest.raises(HostRequirementsError) as excinfo:
        validator.validate_host(make_cluster(), host)
    assert excinfo.value.result == ValidationResult.failure(
        "lvm-host",
        "Failed to get the host requirements for host with id host-1",
        "requirements unavailable",
    )

    # Missing inventory is still reported before requirements are needed.
    host = Host(id="host-2")
    result = validator.validate_host(make_cluster(), host)
    assert result.status == ValidationStatus.PENDING
