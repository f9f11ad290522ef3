"""Core domain models for generated time-series data."""

from dataclasses import dataclass, field
from datetime import datetime

FieldValue = float | int | str | bool


@dataclass
class Point:
    """A single synthetic measurement sample.

    Points are reusable buffers: the generation driver allocates one per run,
    simulators fill it in place and the driver calls reset() after every
    iteration so nothing leaks into the next record.

    Attributes:
        timestamp: Sample time (UTC), or None on an empty buffer.
        measurement_name: Measurement the sample belongs to (e.g., cpu).
        tag_keys: Tag keys, in emission order.
        tag_values: Tag values, parallel to tag_keys.
        field_keys: Field keys, in emission order.
        field_values: Field values, parallel to field_keys.
    """

    timestamp: datetime | None = None
    measurement_name: str = ""
    tag_keys: list[str] = field(default_factory=list)
    tag_values: list[str] = field(default_factory=list)
    field_keys: list[str] = field(default_factory=list)
    field_values: list[FieldValue] = field(default_factory=list)

    def set_timestamp(self, timestamp: datetime) -> None:
        self.timestamp = timestamp

    def set_measurement_name(self, name: str) -> None:
        self.measurement_name = name

    def append_tag(self, key: str, value: str) -> None:
        """Append a tag key/value pair."""
        self.tag_keys.append(key)
        self.tag_values.append(value)

    def append_field(self, key: str, value: FieldValue) -> None:
        """Append a field key/value pair."""
        self.field_keys.append(key)
        self.field_values.append(value)

    def tags(self) -> list[tuple[str, str]]:
        return list(zip(self.tag_keys, self.tag_values))

    def fields(self) -> list[tuple[str, FieldValue]]:
        return list(zip(self.field_keys, self.field_values))

    def reset(self) -> None:
        """Return the buffer to its freshly constructed, empty state.

        The lists are cleared in place so the same storage is reused.
        """
        self.timestamp = None
        self.measurement_name = ""
        self.tag_keys.clear()
        self.tag_values.clear()
        self.field_keys.clear()
        self.field_values.clear()
