"""Bulk-load serializers, keyed by output format name."""

from tsloadgen.core.config import (
    FORMAT_CASSANDRA,
    FORMAT_INFLUX,
    FORMAT_MONGO,
    FORMAT_TIMESCALEDB,
    validate_format,
)
from tsloadgen.core.encoding.cassandra import CassandraSerializer
from tsloadgen.core.encoding.influx import InfluxSerializer
from tsloadgen.core.encoding.mongo import MongoSerializer
from tsloadgen.core.encoding.timescaledb import TimescaleDBSerializer

SERIALIZERS = {
    FORMAT_CASSANDRA: CassandraSerializer,
    FORMAT_INFLUX: InfluxSerializer,
    FORMAT_MONGO: MongoSerializer,
    FORMAT_TIMESCALEDB: TimescaleDBSerializer,
}


def get_serializer(
    fmt: str,
) -> CassandraSerializer | InfluxSerializer | MongoSerializer | TimescaleDBSerializer:
    """Return a new serializer for fmt.

    Raises:
        ConfigurationError: If fmt is not a known format.
    """
    validate_format(fmt)
    return SERIALIZERS[fmt]()


__all__ = [
    "SERIALIZERS",
    "CassandraSerializer",
    "InfluxSerializer",
    "MongoSerializer",
    "TimescaleDBSerializer",
    "get_serializer",
]
