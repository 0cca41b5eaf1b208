"""Validation verdicts returned by add-on operators."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "ReadinessReport",
    "ValidationResult",
    "ValidationStatus",
]


class ValidationStatus(str, Enum):
    """Outcome of a single validation."""

    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"
    """Some required input, such as the host inventory, is not available yet.

    Pending validations are resolved by waiting. They are never reported once
    the missing input is present.
    """


class ValidationResult(BaseModel):
    """Outcome of one cluster or host validation for one operator."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    status: Annotated[
        ValidationStatus,
        Field(title="Status", examples=[ValidationStatus.FAILURE]),
    ]

    validation_id: Annotated[
        str,
        Field(
            title="Validation ID",
            description="Identifier of the validation this result is for",
            examples=["lvm-requirements-satisfied"],
        ),
    ]

    reasons: Annotated[
        tuple[str, ...],
        Field(
            title="Reasons",
            description="Human-readable reasons the validation did not pass",
        ),
    ] = ()

    @model_validator(mode="after")
    def _validate_reasons(self) -> Self:
        if self.status == ValidationStatus.SUCCESS and self.reasons:
            raise ValueError("Successful validations cannot have reasons")
        if self.status != ValidationStatus.SUCCESS and not self.reasons:
            msg = f"Validation with status {self.status.value} needs a reason"
            raise ValueError(msg)
        return self

    @classmethod
    def success(cls, validation_id: str) -> Self:
        """Construct a successful result.

        Parameters
        ----------
        validation_id
            Identifier of the validation.
        """
        return cls(
            status=ValidationStatus.SUCCESS, validation_id=validation_id
        )

    @classmethod
    def failure(cls, validation_id: str, *reasons: str) -> Self:
        """Construct a failed result.

        Parameters
        ----------
        validation_id
            Identifier of the validation.
        *reasons
            Why the validation failed. At least one reason is required.
        """
        return cls(
            status=ValidationStatus.FAILURE,
            validation_id=validation_id,
            reasons=reasons,
        )

    @classmethod
    def pending(cls, validation_id: str, *reasons: str) -> Self:
        """Construct a result for a validation waiting on missing input.

        Parameters
        ----------
        validation_id
            Identifier of the validation.
        *reasons
            What the validation is waiting for.
        """
        return cls(
            status=ValidationStatus.PENDING,
            validation_id=validation_id,
            reasons=reasons,
        )


class ReadinessReport(BaseModel):
    """Aggregated outcome of validating every requested operator."""

    model_config = ConfigDict(
        alias_generator=to_camel, frozen=True, populate_by_name=True
    )

    status: Annotated[
        ValidationStatus,
        Field(
            title="Overall status",
            description=(
                "``failure`` if any validation failed, otherwise ``pending``"
                " if any validation is pending, otherwise ``success``"
            ),
        ),
    ]

    results: Annotated[
        tuple[ValidationResult, ...],
        Field(title="Results of the individual validations"),
    ] = ()

    @classmethod
    def from_results(cls, results: list[ValidationResult]) -> Self:
        """Aggregate individual validation results.

        Parameters
        ----------
        results
            Results of all validations that were run.

        Returns
        -------
        ReadinessReport
            Report whose status is the worst status of any result.
        """
        statuses = {r.status for r in results}
        if ValidationStatus.FAILURE in statuses:
            status = ValidationStatus.FAILURE
        elif ValidationStatus.PENDING in statuses:
            status = ValidationStatus.PENDING
        else:
            status = ValidationStatus.SUCCESS
        return cls(status=status, results=tuple(results))

    @property
    def ready(self) -> bool:
        """Whether every validation passed."""
        return self.status == ValidationStatus.SUCCESS
