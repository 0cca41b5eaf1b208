"""Command-line interface for add-on validation."""

from __future__ import annotations

import functools
import json
import os
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

import click
import yaml
from safir.asyncio import run_with_asyncio
from safir.click import display_help
from safir.slack.blockkit import SlackException
from safir.slack.webhook import SlackWebhookClient
from structlog.stdlib import get_logger

from . import __version__
from .config import Config
from .constants import (
    ALERT_HOOK_ENV_VAR,
    APPLICATION_NAME,
    CONFIG_FILE,
    CONFIG_FILE_ENV_VAR,
    ROOT_LOGGER,
)
from .exceptions import UnknownOperatorError
from .models.domain.cluster import ClusterContext, Host
from .orchestrator import ReadinessOrchestrator
from .registry import OperatorRegistry

__all__ = ["main"]


def _alerting[**P, R](func: Callable[P, Awaitable[R]]) -> Callable[P, R]:
    """Run an async command, reporting uncaught exceptions to Slack.

    Click usage errors are re-raised without being reported.
    """

    @run_with_asyncio
    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        slack_client = _make_slack_client(os.getenv(ALERT_HOOK_ENV_VAR))
        try:
            return await func(*args, **kwargs)
        except click.ClickException:
            raise
        except Exception as exc:
            if slack_client:
                if isinstance(exc, SlackException):
                    await slack_client.post_exception(exc)
                else:
                    await slack_client.post_uncaught_exception(exc)
            raise

    return wrapper


def _make_slack_client(alert_hook: str | None) -> SlackWebhookClient | None:
    if not alert_hook:
        return None
    logger = get_logger(ROOT_LOGGER)
    return SlackWebhookClient(alert_hook, APPLICATION_NAME, logger=logger)


def _load_config(config_file: Path | None, *, debug: bool) -> Config:
    """Load configuration, preferring a config file named in the environment.

    If no configuration file is found, the defaults plus any environment
    settings are used.
    """
    if env_config_path := os.getenv(CONFIG_FILE_ENV_VAR):
        config_file = Path(env_config_path)
    if config_file and config_file.exists():
        config = Config.from_file(config_file)
    else:
        config = Config()
        config.configure_logging()
    if debug:
        config.debug = True
        config.configure_logging()
    return config


def _load_cluster(path: Path) -> ClusterContext:
    with path.open("r") as f:
        return ClusterContext.model_validate(yaml.safe_load(f))


def _load_host(path: Path) -> Host:
    with path.open("r") as f:
        return Host.model_validate(yaml.safe_load(f))


def _make_registry(config: Config) -> OperatorRegistry:
    try:
        return OperatorRegistry.from_config(config, get_logger(ROOT_LOGGER))
    except UnknownOperatorError as e:
        raise click.UsageError(f"{e} in configuration") from e


def _make_orchestrator(config: Config) -> ReadinessOrchestrator:
    alert_hook = config.alert_hook
    slack_client = _make_slack_client(
        alert_hook.get_secret_value() if alert_hook else None
    )
    return ReadinessOrchestrator(
        _make_registry(config),
        get_logger(ROOT_LOGGER),
        slack_client=slack_client,
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, message="%(version)s")
def main() -> None:
    """Cluster add-on validation command-line interface."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.argument("subtopic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None, subtopic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic, subtopic)


@main.command()
@click.option(
    "--cluster",
    "cluster_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file describing the cluster",
)
@click.option(
    "--host",
    "host_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file describing a host (may be repeated)",
)
@click.option(
    "--operator",
    "-o",
    "operators",
    multiple=True,
    help="Operator to validate (may be repeated, default all)",
)
@click.option(
    "--config-file",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILE,
    help="Application configuration file",
)
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging")
@_alerting
async def validate(
    *,
    cluster_file: Path,
    host_files: tuple[Path, ...],
    operators: tuple[str, ...],
    config_file: Path | None,
    debug: bool,
) -> None:
    """Check whether operators can be installed on a cluster.

    Prints the readiness report as JSON and exits with status 1 if any
    validation failed or is still pending. Malformed host data is reported
    to Slack if an alert hook is configured.
    """
    config = _load_config(config_file, debug=debug)
    orchestrator = _make_orchestrator(config)
    cluster = _load_cluster(cluster_file)
    hosts = [_load_host(p) for p in host_files]
    try:
        report = await orchestrator.check_readiness_and_alert(
            cluster, hosts, operators or None
        )
    except UnknownOperatorError as e:
        raise click.BadParameter(str(e), param_hint="--operator") from e
    click.echo(report.model_dump_json(by_alias=True, indent=2))
    if not report.ready:
        sys.exit(1)


@main.command()
@click.option(
    "--cluster",
    "cluster_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file describing the cluster",
)
@click.option(
    "--operator",
    "-o",
    "operators",
    multiple=True,
    help="Operator to report on (may be repeated, default all)",
)
@click.option(
    "--config-file",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILE,
    help="Application configuration file",
)
@_alerting
async def requirements(
    *,
    cluster_file: Path,
    operators: tuple[str, ...],
    config_file: Path | None,
) -> None:
    """Print the preflight hardware requirements of operators as JSON."""
    config = _load_config(config_file, debug=False)
    orchestrator = _make_orchestrator(config)
    cluster = _load_cluster(cluster_file)
    try:
        preflight = orchestrator.get_preflight_requirements(
            cluster, operators or None
        )
    except UnknownOperatorError as e:
        raise click.BadParameter(str(e), param_hint="--operator") from e
    output = [r.model_dump(mode="json", by_alias=True) for r in preflight]
    click.echo(json.dumps(output, indent=2))


@main.command()
@click.option(
    "--cluster",
    "cluster_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file describing the cluster",
)
@click.option("--operator", "-o", "operator", required=True)
@click.option(
    "--output",
    "output_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory into which to write the manifests",
)
@click.option(
    "--config-file",
    "-c",
    type=click.Path(dir_okay=False, path_type=Path),
    default=CONFIG_FILE,
    help="Application configuration file",
)
@_alerting
async def manifests(
    *,
    cluster_file: Path,
    operator: str,
    output_dir: Path,
    config_file: Path | None,
) -> None:
    """Write the installation manifests of an operator to a directory.

    The cluster-scoped custom resource is written to
    :file:`{operator}_custom_resource.yaml`.
    """
    config = _load_config(config_file, debug=False)
    registry = _make_registry(config)
    cluster = _load_cluster(cluster_file)
    try:
        plugin = registry.get(operator)
    except UnknownOperatorError as e:
        raise click.BadParameter(str(e), param_hint="--operator") from e
    named, custom_resource = plugin.generate_manifests(cluster)
    output_dir.mkdir(parents=True, exist_ok=True)
    for name, content in named.items():
        (output_dir / name).write_bytes(content)
    (output_dir / f"{operator}_custom_resource.yaml").write_bytes(
        custom_resource
    )
    for name in [*named, f"{operator}_custom_resource.yaml"]:
        click.echo(str(output_dir / name))
