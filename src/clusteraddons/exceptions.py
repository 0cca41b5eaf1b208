"""Exceptions for cluster add-on validation."""

from __future__ import annotations

from typing import override

from safir.slack.blockkit import (
    SlackBaseField,
    SlackException,
    SlackMessage,
    SlackTextBlock,
    SlackTextField,
)
from safir.slack.sentry import SentryEventInfo

from .models.v1.validation import ValidationResult

__all__ = [
    "DependencyCycleError",
    "DuplicateOperatorError",
    "HostRequirementsError",
    "InventoryParseError",
    "RequirementsError",
    "UnknownOperatorError",
    "ValidatorError",
]


class RequirementsError(SlackException):
    """The hardware requirements of an operator could not be determined."""


class ValidatorError(SlackException):
    """Validation could not be completed because its input was malformed.

    Unlike an ordinary failed validation, which is returned, this is raised so
    that the caller can log and alert on it. The failed validation result that
    should be reported to the user is attached.

    Parameters
    ----------
    message
        Summary of error.
    result
        Failed validation result to report for this validation.
    host_id
        Host being validated, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        result: ValidationResult,
        host_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.result = result
        self.host_id = host_id

    @override
    def to_slack(self) -> SlackMessage:
        """Format the exception as a Slack message.

        Returns
        -------
        safir.slack.blockkit.SlackMessage
            Slack message suitable for posting with
            `~safir.slack.webhook.SlackWebhookClient`.
        """
        message = super().to_slack()
        fields: list[SlackBaseField] = [
            SlackTextField(
                heading="Validation", text=self.result.validation_id
            )
        ]
        if self.host_id:
            fields.append(SlackTextField(heading="Host", text=self.host_id))
        message.fields.extend(fields)
        reasons = "\n".join(self.result.reasons)
        message.blocks.append(SlackTextBlock(heading="Reasons", text=reasons))
        return message

    @override
    def to_sentry(self) -> SentryEventInfo:
        """Return a collection of Sentry event metadata about the exception.

        Returns
        -------
        safir.slack.sentry.SentryEventInfo
            Sentry event metadata.
        """
        info = super().to_sentry()
        info.tags["validation_id"] = self.result.validation_id
        if self.host_id:
            info.tags["host_id"] = self.host_id
        info.contexts["result"] = self.result.model_dump(mode="json")
        return info


class InventoryParseError(ValidatorError):
    """The inventory reported for a host could not be parsed."""


class HostRequirementsError(ValidatorError):
    """The requirements for a host could not be determined."""


class DuplicateOperatorError(SlackException):
    """An operator with the same name is already registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Operator {name} is already registered")
        self.name = name


class UnknownOperatorError(SlackException):
    """An operator was requested that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown operator {name}")
        self.name = name


class DependencyCycleError(SlackException):
    """Operator dependencies form a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        super().__init__("Operator dependency cycle: " + " -> ".join(cycle))
        self.cycle = cycle
