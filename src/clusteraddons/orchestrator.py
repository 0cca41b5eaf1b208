"""Aggregation of add-on validations into an installability decision."""

from __future__ import annotations

from collections.abc import Iterable

from safir.slack.webhook import SlackWebhookClient
from structlog.stdlib import BoundLogger, get_logger

from .constants import ROOT_LOGGER
from .exceptions import ValidatorError
from .models.domain.cluster import ClusterContext, Host
from .models.v1.requirements import OperatorHardwareRequirements
from .models.v1.validation import ReadinessReport, ValidationResult
from .registry import OperatorRegistry

__all__ = ["ReadinessOrchestrator"]


class ReadinessOrchestrator:
    """Runs the validations of every requested operator.

    Parameters
    ----------
    registry
        Operators that may be requested.
    logger
        Logger to use. If not given, the package logger is used.
    slack_client
        If given, malformed host data found by
        `check_readiness_and_alert` is reported to Slack.
    """

    def __init__(
        self,
        registry: OperatorRegistry,
        logger: BoundLogger | None = None,
        *,
        slack_client: SlackWebhookClient | None = None,
    ) -> None:
        self._registry = registry
        self._logger = logger or get_logger(ROOT_LOGGER)
        self._slack = slack_client

    def validate_cluster(
        self, cluster: ClusterContext, operators: Iterable[str] | None = None
    ) -> list[ValidationResult]:
        """Run the cluster validation of each operator.

        Parameters
        ----------
        cluster
            Cluster to validate.
        operators
            Names of the requested operators. Dependencies are added
            automatically. If not given, all registered operators are used.

        Returns
        -------
        list of ValidationResult
            One result per operator.
        """
        results = []
        for operator in self._registry.resolve(cluster, operators):
            result = operator.validate_cluster(cluster)
            self._log_result(result, operator=operator.name)
            results.append(result)
        return results

    def validate_host(
        self,
        cluster: ClusterContext,
        host: Host,
        operators: Iterable[str] | None = None,
    ) -> list[ValidationResult]:
        """Run the host validation of each operator.

        Malformed host data is logged as an error and reported using the
        failed result attached to the exception.

        Parameters
        ----------
        cluster
            Cluster the host belongs to.
        host
            Host to validate.
        operators
            Names of the requested operators. Dependencies are added
            automatically. If not given, all registered operators are used.

        Returns
        -------
        list of ValidationResult
            One result per operator.
        """
        results, _ = self._validate_host(cluster, host, operators)
        return results

    def check_readiness(
        self,
        cluster: ClusterContext,
        hosts: Iterable[Host],
        operators: Iterable[str] | None = None,
    ) -> ReadinessReport:
        """Decide whether the requested operators can be installed.

        Parameters
        ----------
        cluster
            Cluster to validate.
        hosts
            Hosts of the cluster to validate.
        operators
            Names of the requested operators. If not given, all registered
            operators are used.

        Returns
        -------
        ReadinessReport
            Cluster results followed by the results for each host.
        """
        report, _ = self._check_readiness(cluster, hosts, operators)
        return report

    async def check_readiness_and_alert(
        self,
        cluster: ClusterContext,
        hosts: Iterable[Host],
        operators: Iterable[str] | None = None,
    ) -> ReadinessReport:
        """Decide whether operators can be installed and alert on bad data.

        Behaves like `check_readiness`, and then posts every error caused by
        malformed host data to Slack if a Slack client was configured.

        Parameters
        ----------
        cluster
            Cluster to validate.
        hosts
            Hosts of the cluster to validate.
        operators
            Names of the requested operators. If not given, all registered
            operators are used.

        Returns
        -------
        ReadinessReport
            Cluster results followed by the results for each host.
        """
        report, errors = self._check_readiness(cluster, hosts, operators)
        for error in errors:
            await self._maybe_post_slack_exception(error)
        return report

    def get_preflight_requirements(
        self, cluster: ClusterContext, operators: Iterable[str] | None = None
    ) -> list[OperatorHardwareRequirements]:
        """Collect the preflight requirements of each operator.

        Parameters
        ----------
        cluster
            Cluster the operators will be installed on.
        operators
            Names of the requested operators. If not given, all registered
            operators are used.

        Returns
        -------
        list of OperatorHardwareRequirements
            Requirements of each operator, dependencies first.
        """
        return [
            o.get_preflight_requirements(cluster)
            for o in self._registry.resolve(cluster, operators)
        ]

    def _check_readiness(
        self,
        cluster: ClusterContext,
        hosts: Iterable[Host],
        operators: Iterable[str] | None,
    ) -> tuple[ReadinessReport, list[ValidatorError]]:
        requested = list(operators) if operators is not None else None
        results = self.validate_cluster(cluster, requested)
        errors: list[ValidatorError] = []
        for host in hosts:
            host_results, host_errors = self._validate_host(
                cluster, host, requested
            )
            results.extend(host_results)
            errors.extend(host_errors)
        report = ReadinessReport.from_results(results)
        self._logger.info(
            "Checked add-on readiness",
            cluster=cluster.id,
            status=report.status.value,
        )
        return report, errors

    def _validate_host(
        self,
        cluster: ClusterContext,
        host: Host,
        operators: Iterable[str] | None,
    ) -> tuple[list[ValidationResult], list[ValidatorError]]:
        results = []
        errors: list[ValidatorError] = []
        for operator in self._registry.resolve(cluster, operators):
            try:
                result = operator.validate_host(cluster, host)
            except ValidatorError as e:
                self._logger.exception(
                    "Host validation could not be completed",
                    operator=operator.name,
                    cluster=cluster.id,
                    host=host.id,
                )
                result = e.result
                errors.append(e)
            self._log_result(result, operator=operator.name, host=host.id)
            results.append(result)
        return results, errors

    def _log_result(self, result: ValidationResult, **kwargs: str) -> None:
        self._logger.debug(
            "Validation complete",
            validation=result.validation_id,
            status=result.status.value,
            reasons=list(result.reasons),
            **kwargs,
        )

    async def _maybe_post_slack_exception(self, exc: ValidatorError) -> None:
        """Post an exception to Slack if Slack reporting is configured.

        Parameters
        ----------
        exc
            Exception to report.
        """
        if not self._slack:
            return
        await self._slack.post_exception(exc)
