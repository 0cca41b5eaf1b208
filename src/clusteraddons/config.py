"""Application and operator configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Self

import yaml
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)
from safir.logging import LogLevel, Profile, configure_logging

from .constants import ALERT_HOOK_ENV_VAR, ENV_PREFIX, ROOT_LOGGER

__all__ = [
    "Config",
    "EnvFirstSettings",
    "LvmConfig",
    "OdfLvmConfig",
    "OperatorRequirementsConfig",
]


class EnvFirstSettings(BaseSettings):
    """Base class for Pydantic settings with environment overrides.

    Classes that inherit from this base class will prioritize environment
    variables over arguments to the class constructor.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX, extra="forbid", validate_by_name=True
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Override the sources of settings.

        Deactivate :file:`.env` and secret file support. Allow environment
        variables to override init parameters, since init parameters come
        from the YAML configuration file and environment variables take
        precedence.
        """
        return (env_settings, init_settings)


class OperatorRequirementsConfig(BaseSettings):
    """Per-host hardware requirements of a storage operator.

    Either value may be left unset, in which case the corresponding
    requirement is not checked. An empty environment variable also counts as
    unset.
    """

    model_config = SettingsConfigDict(
        extra="forbid",
        env_parse_none_str="",
        validate_by_name=True,
    )

    cpu_cores_per_host: Annotated[
        int | None,
        Field(
            title="CPU cores per host",
            description="CPU cores the operator needs on each host",
            ge=0,
        ),
    ] = None

    ram_mib_per_host: Annotated[
        int | None,
        Field(
            title="Memory per host",
            description="Memory in MiB the operator needs on each host",
            ge=0,
        ),
    ] = None


class LvmConfig(OperatorRequirementsConfig):
    """Requirements of the LVM storage operator."""

    cpu_cores_per_host: Annotated[
        int | None,
        Field(
            title="CPU cores per host",
            description="CPU cores the operator needs on each host",
            validation_alias=AliasChoices(
                "LVM_CPU_PER_HOST", "cpuCoresPerHost"
            ),
            ge=0,
        ),
    ] = 1

    ram_mib_per_host: Annotated[
        int | None,
        Field(
            title="Memory per host",
            description="Memory in MiB the operator needs on each host",
            validation_alias=AliasChoices(
                "LVM_MEMORY_PER_HOST_MIB", "ramMibPerHost"
            ),
            ge=0,
        ),
    ] = 1200


class OdfLvmConfig(OperatorRequirementsConfig):
    """Requirements of the legacy ODF LVM storage operator.

    These have no defaults and must be set in the environment to be checked.
    """

    cpu_cores_per_host: Annotated[
        int | None,
        Field(
            title="CPU cores per host",
            description="CPU cores the operator needs on each host",
            validation_alias=AliasChoices(
                "ODF_LVM_CPU_PER_HOST", "cpuCoresPerHost"
            ),
            ge=0,
        ),
    ] = None

    ram_mib_per_host: Annotated[
        int | None,
        Field(
            title="Memory per host",
            description="Memory in MiB the operator needs on each host",
            validation_alias=AliasChoices(
                "ODF_LVM_MEMORY_MIB_PER_HOST", "ramMibPerHost"
            ),
            ge=0,
        ),
    ] = None


class Config(EnvFirstSettings):
    """Configuration for the add-on validation service."""

    operators: Annotated[
        list[str] | None,
        Field(
            title="Enabled operators",
            description=(
                "Names of the operators to register. If not set, all known"
                " operators are registered."
            ),
            validation_alias=AliasChoices(
                ENV_PREFIX + "OPERATORS", "operators"
            ),
        ),
    ] = None

    debug: Annotated[
        bool,
        Field(
            title="Show debug output and log style",
            description=(
                "If true, log at debug level with non-structured,"
                " human-readable output"
            ),
        ),
    ] = False

    log_profile: Annotated[
        Profile,
        Field(
            title="Logging profile",
            validation_alias=AliasChoices(
                ENV_PREFIX + "LOG_PROFILE", "logProfile"
            ),
        ),
    ] = Profile.production

    log_level: Annotated[
        LogLevel,
        Field(
            title="Log level",
            validation_alias=AliasChoices(
                ENV_PREFIX + "LOG_LEVEL", "logLevel"
            ),
        ),
    ] = LogLevel.INFO

    add_timestamp: Annotated[
        bool,
        Field(
            title="Add timestamp to log lines",
            validation_alias=AliasChoices(
                ENV_PREFIX + "ADD_TIMESTAMP", "addTimestamp"
            ),
        ),
    ] = False

    alert_hook: Annotated[
        SecretStr | None,
        Field(
            title="Slack webhook URL used for sending alerts",
            description=(
                "An https URL, which should be considered secret."
                " If not set or set to `None`, this feature will be disabled."
            ),
            validation_alias=AliasChoices(ALERT_HOOK_ENV_VAR, "alertHook"),
        ),
    ] = None

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Construct the configuration from a YAML file.

        Parameters
        ----------
        path
            Path to the configuration file in YAML.

        Returns
        -------
        Config
            The corresponding configuration.
        """
        with path.open("r") as f:
            config = cls(**(yaml.safe_load(f) or {}))
        config.configure_logging()
        return config

    def configure_logging(self) -> None:
        """Configure logging based on the application configuration."""
        if self.debug:
            log_level = LogLevel.DEBUG
            log_profile = Profile.development
        else:
            log_level = self.log_level
            log_profile = self.log_profile

        configure_logging(
            profile=log_profile,
            log_level=log_level,
            add_timestamp=self.add_timestamp,
            name=ROOT_LOGGER,
        )
