"""Cassandra CSV serializer."""

from typing import BinaryIO

from tsloadgen.core.encoding.values import format_value, unix_nanos
from tsloadgen.core.models import FieldValue, Point


def _series_type(value: FieldValue) -> str:
    """Return the series table suffix for a field value."""
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "bigint"
    if isinstance(value, float):
        return "double"
    return "string"


class CassandraSerializer:
    """Writes points as Cassandra series CSV rows, one row per field.

    Output looks like:
    series_double,cpu,hostname=host_0,...,usage_user,2016-01-01,1451606400000000000,58.1
    """

    schema_header = False

    def serialize(self, point: Point, out: BinaryIO) -> None:
        """Write one CSV row for every field of point."""
        if point.timestamp is None:
            raise ValueError("point has no timestamp")
        tags = ",".join(f"{key}={value}" for key, value in point.tags())
        day = point.timestamp.strftime("%Y-%m-%d")
        nanos = unix_nanos(point.timestamp)
        rows = [
            f"series_{_series_type(value)},{point.measurement_name},{tags},"
            f"{key},{day},{nanos},{format_value(value)}\n"
            for key, value in point.fields()
        ]
        out.write("".join(rows).encode())
