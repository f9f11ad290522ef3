"""Port interfaces for the generation pipeline.

These protocols define the contracts that simulators, serializers and query
generators must implement. The driver and the CLIs depend only on these
interfaces, not on concrete implementations.
"""

from collections.abc import Mapping, Sequence
from datetime import datetime
from random import Random
from typing import Any, BinaryIO, Protocol, runtime_checkable

from tsloadgen.core.config import DatabaseConfig
from tsloadgen.core.models import Point


@runtime_checkable
class Simulator(Protocol):
    """Port for deterministic point generators.

    Progression must be a pure function of the seed, the configuration and
    the number of next() calls made so far.
    Examples: DevopsSimulator, CPUOnlySimulator.
    """

    def finished(self) -> bool:
        """Return True once simulated time has passed the configured end."""
        ...

    def next(self, point: Point) -> bool:
        """Advance one step and fill point.

        Args:
            point: Empty buffer to populate.

        Returns:
            True if this step produced a record that should be emitted.
        """
        ...

    def fields(self) -> Mapping[str, Sequence[str]]:
        """Return measurement name -> ordered field names for this run."""
        ...


@runtime_checkable
class SimulatorConfig(Protocol):
    """Port for immutable simulator configurations."""

    def to_simulator(self) -> Simulator:
        """Build the single Simulator this configuration describes."""
        ...


@runtime_checkable
class PointSerializer(Protocol):
    """Port for bulk-load encoders.

    Serializers hold no reference to the points they encode.
    Examples: InfluxSerializer, TimescaleDBSerializer, MongoSerializer.
    """

    def serialize(self, point: Point, out: BinaryIO) -> None:
        """Write exactly one encoded record for point to out.

        Raises:
            OSError: If writing to out fails.
        """
        ...


@runtime_checkable
class Query(Protocol):
    """Port for pooled, reusable benchmark query containers."""

    id: int
    human_label: str

    def reset(self) -> None:
        """Return the query to its empty state."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Return the engine payload as a JSON-serializable dict."""
        ...


@runtime_checkable
class QueryGenerator(Protocol):
    """Port for per-(engine, use-case) query generators.

    The returned Query is owned by the generator's pool. Callers must finish
    with it before the next dispatch() on the same generator.
    """

    def dispatch(self, scale_var: int) -> Query:
        """Fill and return a pooled Query for a population of scale_var hosts."""
        ...


class QueryGeneratorFactory(Protocol):
    """Callable building a QueryGenerator for one engine and use case."""

    def __call__(
        self,
        db_config: DatabaseConfig,
        start: datetime,
        end: datetime,
        rng: Random | None = None,
    ) -> QueryGenerator: ...
