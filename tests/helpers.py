"""Test doubles and constants shared across test modules."""

import copy
import io
from collections.abc import Mapping, Sequence
from datetime import datetime, timedelta, timezone

from tsloadgen.core.models import Point

START = datetime(2016, 1, 1, tzinfo=timezone.utc)
ONE_MINUTE_END = START + timedelta(minutes=1)


class ScriptedSimulator:
    """Simulator replaying a fixed script of (produced, value) steps.

    Each step fills the point with a "test" measurement whose single field
    holds the step's value, so records can be told apart in the output.
    Points handed to next() are recorded to check the driver resets them.
    """

    def __init__(self, script: Sequence[tuple[bool, int]]) -> None:
        self._script = list(script)
        self._index = 0
        self.points_seen: list[Point] = []

    def finished(self) -> bool:
        return self._index >= len(self._script)

    def next(self, point: Point) -> bool:
        self.points_seen.append(copy.deepcopy(point))
        produced, value = self._script[self._index]
        self._index += 1
        point.set_measurement_name("test")
        point.set_timestamp(START + timedelta(seconds=value))
        point.append_tag("hostname", f"host_{value}")
        point.append_field("value", value)
        return produced

    def fields(self) -> Mapping[str, Sequence[str]]:
        return {"test": ["value"]}


class RecordingSerializer:
    """Serializer writing the field value of each point on its own line."""

    schema_header = False

    def __init__(self) -> None:
        self.values: list[int] = []

    def serialize(self, point: Point, out: io.BytesIO) -> None:
        value = point.field_values[0]
        self.values.append(value)
        out.write(f"{value}\n".encode())


class FailingSink(io.BytesIO):
    """Binary sink that fails every write."""

    def write(self, data: bytes) -> int:  # type: ignore[override]
        raise OSError("disk full")


class InterruptedSink(io.BytesIO):
    """Binary sink that exits the process after a number of writes.

    Records whether it was flushed before the exit propagated.
    """

    def __init__(self, writes_before_exit: int) -> None:
        super().__init__()
        self.remaining = writes_before_exit
        self.flushed = False

    def write(self, data: bytes) -> int:  # type: ignore[override]
        if self.remaining == 0:
            raise SystemExit(0)
        self.remaining -= 1
        return super().write(data)

    def flush(self) -> None:
        self.flushed = True
        super().flush()


class StaticFieldsSimulator:
    """Simulator that only describes a schema; it never produces points."""

    def __init__(self, fields: Mapping[str, Sequence[str]]) -> None:
        self._fields = fields

    def finished(self) -> bool:
        return True

    def next(self, point: Point) -> bool:
        return False

    def fields(self) -> Mapping[str, Sequence[str]]:
        return self._fields
