"""MongoDB BSON serializer."""

from typing import BinaryIO

import bson

from tsloadgen.core.encoding.values import unix_nanos
from tsloadgen.core.models import Point


class MongoSerializer:
    """Writes each point as one BSON document.

    BSON documents carry their own length prefix, so the output stream is a
    plain concatenation that can be read back with bson.decode_file_iter().
    """

    schema_header = False

    def serialize(self, point: Point, out: BinaryIO) -> None:
        """Write one BSON document for point."""
        document = {
            "measurement": point.measurement_name,
            "timestamp_ns": bson.Int64(unix_nanos(point.timestamp)),
            "tags": dict(point.tags()),
            "fields": dict(point.fields()),
        }
        out.write(bson.encode(document))
