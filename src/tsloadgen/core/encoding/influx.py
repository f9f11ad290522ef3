"""InfluxDB line protocol serializer."""

from typing import BinaryIO

from tsloadgen.core.encoding.values import format_value, unix_nanos
from tsloadgen.core.models import FieldValue, Point

_MEASUREMENT_ESCAPES = str.maketrans({",": r"\,", " ": r"\ "})
_TAG_ESCAPES = str.maketrans({",": r"\,", " ": r"\ ", "=": r"\="})


def _format_field(value: FieldValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"{value}i"
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return format_value(value)


class InfluxSerializer:
    """Writes points in InfluxDB line protocol.

    Output looks like:
    cpu,hostname=host_0,region=eu-west-1 usage_user=58.1 1451606400000000000
    """

    schema_header = False

    def serialize(self, point: Point, out: BinaryIO) -> None:
        """Write one line protocol record for point."""
        parts = [point.measurement_name.translate(_MEASUREMENT_ESCAPES)]
        for key, value in point.tags():
            key, value = key.translate(_TAG_ESCAPES), value.translate(_TAG_ESCAPES)
            parts.append(f",{key}={value}")
        fields = ",".join(
            f"{key.translate(_TAG_ESCAPES)}={_format_field(value)}"
            for key, value in point.fields()
        )
        line = f"{''.join(parts)} {fields} {unix_nanos(point.timestamp)}\n"
        out.write(line.encode())
