"""TimescaleDB pseudo-CSV serializer."""

from typing import BinaryIO

from tsloadgen.core.encoding.values import format_value, unix_nanos
from tsloadgen.core.models import Point


class TimescaleDBSerializer:
    """Writes points in the TimescaleDB loader's pseudo-CSV format.

    Each record is a tags line followed by a data line:
    tags,host_0,eu-west-1,eu-west-1b,...
    cpu,1451606400000000000,58.1,2.6,...

    Column names are not repeated per record; they come from the schema
    header written once before the first record.
    """

    schema_header = True

    def serialize(self, point: Point, out: BinaryIO) -> None:
        """Write one tags line and one data line for point."""
        tags = ",".join(["tags", *point.tag_values])
        data = ",".join(
            [
                point.measurement_name,
                str(unix_nanos(point.timestamp)),
                *(format_value(v) for v in point.field_values),
            ]
        )
        out.write(f"{tags}\n{data}\n".encode())
