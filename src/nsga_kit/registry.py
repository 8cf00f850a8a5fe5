"""Registry system for variation operators.

Crossover and mutation operators are chosen by name in NSGA2Config. The
registries map those names to factories that build a configured operator for
one run.

A factory receives two keyword arguments:

- ``config``: the NSGA2Config snapshot of the run
- ``bounds``: the ``(lower, upper)`` pair, already broadcast to the flattened
  decision vector

and returns an operator following the Crossover or Mutation protocol.

There are two independent registries:
1. **CrossoverRegistry**: for crossover operators (Crossover protocol)
2. **MutationRegistry**: for mutation operators (Mutation protocol)

Basic usage:
    ```python
    from nsga_kit.registry import CrossoverRegistry, list_crossovers

    def midpoint_factory(config, bounds):
        def crossover(p1, p2, rng):
            mid = (p1 + p2) / 2
            return mid, mid.copy()
        return crossover

    CrossoverRegistry.register("midpoint", midpoint_factory)

    optimizer = NSGA2(crossover="midpoint")
    list_crossovers()  # ["midpoint", "sbx", "uniform"]
    ```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from nsga_kit.protocols import Crossover, Mutation

if TYPE_CHECKING:
    from nsga_kit.config import NSGA2Config


class _Registry:
    """Class-level name-to-factory mapping shared by the operator registries."""

    _registry: dict[str, Callable[..., Any]]
    _kind: str

    @classmethod
    def register(cls, name: str, factory: Callable[..., Any]) -> None:
        """Register an operator factory under ``name``.

        Args:
            name: Unique name for the operator. Will overwrite if already exists.
            factory: Callable accepting ``config`` and ``bounds`` keyword
                arguments and returning a configured operator.
        """
        cls._registry[name] = factory

    @classmethod
    def list(cls) -> list[str]:
        """Return the sorted list of registered operator names."""
        return sorted(cls._registry.keys())

    @classmethod
    def _build(cls, name: str, **kwargs: Any) -> Any:
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"{cls._kind} operator '{name}' not found. Available operators: {available}")
        return cls._registry[name](**kwargs)


class CrossoverRegistry(_Registry):
    """Registry for crossover operator factories.

    Example:
        ```python
        crossover = CrossoverRegistry.get("sbx", config=NSGA2Config(), bounds=(0.0, 1.0))
        child_a, child_b = crossover(p1, p2, rng)
        ```
    """

    _registry: dict[str, Callable[..., Crossover]] = {}
    _kind = "Crossover"

    @classmethod
    def get(cls, name: str, config: NSGA2Config, bounds: tuple[Any, Any]) -> Crossover:
        """Build the crossover operator registered as ``name``.

        Raises:
            KeyError: If the name is not registered. The message lists the
                available operators.
        """
        return cls._build(name, config=config, bounds=bounds)


class MutationRegistry(_Registry):
    """Registry for mutation operator factories.

    Example:
        ```python
        mutate = MutationRegistry.get("gaussian", config=NSGA2Config(), bounds=(0.0, 1.0))
        child = mutate(child, rng)
        ```
    """

    _registry: dict[str, Callable[..., Mutation]] = {}
    _kind = "Mutation"

    @classmethod
    def get(cls, name: str, config: NSGA2Config, bounds: tuple[Any, Any]) -> Mutation:
        """Build the mutation operator registered as ``name``.

        Raises:
            KeyError: If the name is not registered. The message lists the
                available operators.
        """
        return cls._build(name, config=config, bounds=bounds)


def list_crossovers() -> list[str]:
    """List all registered crossover operators."""
    return CrossoverRegistry.list()


def list_mutations() -> list[str]:
    """List all registered mutation operators."""
    return MutationRegistry.list()
