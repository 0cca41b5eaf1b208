"""Test fixtures for cluster add-on validation tests."""

from __future__ import annotations

import pytest
import respx
from safir.testing.slack import MockSlackWebhook, mock_slack_webhook
from structlog.stdlib import BoundLogger, get_logger

from clusteraddons.config import LvmConfig, OdfLvmConfig
from clusteraddons.constants import ROOT_LOGGER
from clusteraddons.models.domain.cluster import (
    ClusterContext,
    HighAvailabilityMode,
    Host,
    HostRef,
)
from clusteraddons.operators.lvm import ODF_LVM_POLICY, LvmOperator

from .support.inventory import (
    DISK_ID_1,
    DISK_ID_2,
    GB,
    make_disk,
    make_host,
)
from .support.slack import SLACK_WEBHOOK


@pytest.fixture(autouse=True)
def _clear_requirement_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LVM_CPU_PER_HOST",
        "LVM_MEMORY_PER_HOST_MIB",
        "ODF_LVM_CPU_PER_HOST",
        "ODF_LVM_MEMORY_MIB_PER_HOST",
        "CLUSTERADDONS_CONFIG_FILE",
        "CLUSTERADDONS_OPERATORS",
        "CLUSTERADDONS_LOG_LEVEL",
        "CLUSTERADDONS_LOG_PROFILE",
        "CLUSTERADDONS_DEBUG",
        "CLUSTERADDONS_ALERT_HOOK",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logger() -> BoundLogger:
    return get_logger(ROOT_LOGGER)


@pytest.fixture
def mock_slack(respx_mock: respx.Router) -> MockSlackWebhook:
    return mock_slack_webhook(SLACK_WEBHOOK, respx_mock)


@pytest.fixture
def lvm_operator(logger: BoundLogger) -> LvmOperator:
    """LVM operator requiring 1 CPU and 1200 MiB per host."""
    config = LvmConfig(cpu_cores_per_host=1, ram_mib_per_host=1200)
    return LvmOperator(config=config, logger=logger)


@pytest.fixture
def odf_lvm_operator(logger: BoundLogger) -> LvmOperator:
    """Legacy ODF LVM operator requiring 2 CPUs and 2048 MiB per host."""
    config = OdfLvmConfig(cpu_cores_per_host=2, ram_mib_per_host=2048)
    return LvmOperator(ODF_LVM_POLICY, config=config, logger=logger)


@pytest.fixture
def sno_cluster() -> ClusterContext:
    """Single-node cluster at a supported version."""
    return ClusterContext(
        id="cluster-1",
        high_availability_mode=HighAvailabilityMode.NONE,
        hosts=(HostRef(id="host-1"),),
        platform_version="4.12.0",
    )


@pytest.fixture
def sufficient_host() -> Host:
    """Host with one spare SSD and plenty of CPU and memory."""
    return make_host(
        installation_disk_id=DISK_ID_1,
        disks=[
            make_disk(DISK_ID_1, 20 * GB, "HDD"),
            make_disk(DISK_ID_2, 40 * GB, "SSD"),
        ],
    )
