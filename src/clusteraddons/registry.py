"""Registry of installable add-on operators."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Self

from structlog.stdlib import BoundLogger

from .config import Config
from .exceptions import (
    DependencyCycleError,
    DuplicateOperatorError,
    UnknownOperatorError,
)
from .models.domain.cluster import ClusterContext
from .operators.base import Operator
from .operators.lvm import LVM_POLICY, ODF_LVM_POLICY, LvmOperator

__all__ = ["OperatorRegistry"]


class OperatorRegistry:
    """Collection of operators known to the orchestrator.

    Parameters
    ----------
    operators
        Operators to register initially.
    """

    def __init__(self, operators: Iterable[Operator] = ()) -> None:
        self._operators: dict[str, Operator] = {}
        for operator in operators:
            self.register(operator)

    @classmethod
    def from_config(cls, config: Config, logger: BoundLogger) -> Self:
        """Create a registry holding the operators enabled in configuration.

        Parameters
        ----------
        config
            Application configuration.
        logger
            Logger passed to each operator.

        Returns
        -------
        OperatorRegistry
            Registry of the enabled operators.

        Raises
        ------
        UnknownOperatorError
            Raised if the configuration enables an unknown operator.
        """
        policies = {p.operator.name: p for p in (LVM_POLICY, ODF_LVM_POLICY)}
        names = config.operators or list(policies)
        registry = cls()
        for name in names:
            if name not in policies:
                raise UnknownOperatorError(name)
            registry.register(LvmOperator(policies[name], logger=logger))
        return registry

    def __contains__(self, name: object) -> bool:
        return name in self._operators

    def __iter__(self) -> Iterator[Operator]:
        return iter(self._operators.values())

    def __len__(self) -> int:
        return len(self._operators)

    @property
    def names(self) -> list[str]:
        """Names of all registered operators in registration order."""
        return list(self._operators)

    def register(self, operator: Operator) -> None:
        """Add an operator to the registry.

        Parameters
        ----------
        operator
            Operator to add.

        Raises
        ------
        DuplicateOperatorError
            Raised if an operator with the same name is already registered.
        """
        if operator.name in self._operators:
            raise DuplicateOperatorError(operator.name)
        self._operators[operator.name] = operator

    def get(self, name: str) -> Operator:
        """Look up an operator by name.

        Parameters
        ----------
        name
            Name of the operator.

        Returns
        -------
        Operator
            The registered operator.

        Raises
        ------
        UnknownOperatorError
            Raised if no operator by that name is registered.
        """
        if name not in self._operators:
            raise UnknownOperatorError(name)
        return self._operators[name]

    def resolve(
        self, cluster: ClusterContext, names: Iterable[str] | None = None
    ) -> list[Operator]:
        """Expand a set of operators to include all their dependencies.

        Parameters
        ----------
        cluster
            Cluster the operators will be installed on, since dependencies
            may vary by cluster.
        names
            Names of the requested operators. If not given, all registered
            operators are requested.

        Returns
        -------
        list of Operator
            Requested operators and their dependencies, with every operator
            listed after all of its dependencies.

        Raises
        ------
        DependencyCycleError
            Raised if the dependencies form a cycle.
        UnknownOperatorError
            Raised if a requested operator or dependency is not registered.
        """
        resolved: dict[str, Operator] = {}
        in_progress: list[str] = []

        def visit(name: str) -> None:
            if name in resolved:
                return
            if name in in_progress:
                start = in_progress.index(name)
                raise DependencyCycleError([*in_progress[start:], name])
            operator = self.get(name)
            in_progress.append(name)
            for dependency in operator.get_dependencies(cluster):
                visit(dependency)
            in_progress.pop()
            resolved[name] = operator

        for name in self.names if names is None else names:
            visit(name)
        return list(resolved.values())
