"""Startup configuration for data and query generation.

Flags are collected once into an immutable configuration value which is then
passed explicitly to the simulator and query generator factories.
"""

import re
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

# Output data format choices (alphabetical order)
FORMAT_CASSANDRA = "cassandra"
FORMAT_INFLUX = "influx"
FORMAT_MONGO = "mongo"
FORMAT_TIMESCALEDB = "timescaledb"

FORMAT_CHOICES = (FORMAT_CASSANDRA, FORMAT_INFLUX, FORMAT_MONGO, FORMAT_TIMESCALEDB)
QUERY_FORMAT_CHOICES = (FORMAT_INFLUX, FORMAT_TIMESCALEDB)

USE_CASE_CPU_ONLY = "cpu-only"
USE_CASE_CPU_SINGLE = "cpu-single"
USE_CASE_DEVOPS = "devops"

USE_CASE_CHOICES = (USE_CASE_CPU_ONLY, USE_CASE_CPU_SINGLE, USE_CASE_DEVOPS)

DEFAULT_TIMESTAMP_START = "2016-01-01T00:00:00Z"
DEFAULT_TIMESTAMP_END = "2016-01-02T06:00:00Z"
DEFAULT_LOG_INTERVAL = "10s"

ERR_TOTAL_GROUPS_ZERO = "incorrect interleaved groups configuration: total groups = 0"
ERR_INVALID_GROUPS_FMT = (
    "incorrect interleaved groups configuration: id {} >= total groups {}"
)
ERR_INVALID_FORMAT_FMT = "invalid format specifier: {} (valid choices: {})"
ERR_UNKNOWN_USE_CASE_FMT = "unknown use case: '{}'"

_TIMESTAMP_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?$"
)
_DURATION_RE = re.compile(r"^(?P<value>\d+(?:\.\d+)?)(?P<unit>ms|s|m|h)$")
_DURATION_UNITS = {
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
}


class ConfigurationError(ValueError):
    """Raised when startup configuration is invalid.

    Configuration errors are detected before any output is produced and
    always terminate the run.
    """


def validate_groups(group_id: int, total_groups: int) -> None:
    """Check the interleaved generation group settings.

    Raises:
        ConfigurationError: If total_groups is 0 or group_id >= total_groups.
    """
    if total_groups == 0:
        raise ConfigurationError(ERR_TOTAL_GROUPS_ZERO)
    if group_id >= total_groups:
        raise ConfigurationError(ERR_INVALID_GROUPS_FMT.format(group_id, total_groups))


def validate_format(fmt: str, choices: tuple[str, ...] = FORMAT_CHOICES) -> None:
    """Raise ConfigurationError unless fmt is one of choices."""
    if fmt not in choices:
        raise ConfigurationError(ERR_INVALID_FORMAT_FMT.format(fmt, ", ".join(choices)))


def validate_use_case(use_case: str) -> None:
    """Raise ConfigurationError unless use_case is a known synthetic model."""
    if use_case not in USE_CASE_CHOICES:
        raise ConfigurationError(ERR_UNKNOWN_USE_CASE_FMT.format(use_case))


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp and normalize it to UTC.

    Args:
        value: Timestamp string such as "2016-01-01T00:00:00Z".

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        ConfigurationError: If the string is malformed or has no UTC offset.
    """
    if _TIMESTAMP_RE.fullmatch(value) is None:
        raise ConfigurationError(f"invalid timestamp: '{value}'")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ConfigurationError(f"invalid timestamp: '{value}'") from exc
    if parsed.tzinfo is None:
        raise ConfigurationError(f"timestamp has no UTC offset: '{value}'")
    return parsed.astimezone(timezone.utc)


def parse_duration(value: str) -> timedelta:
    """Parse a duration such as "10s", "500ms", "1m" or "2h".

    Raises:
        ConfigurationError: If the string is malformed or not positive.
    """
    match = _DURATION_RE.match(value.strip())
    if match is None:
        raise ConfigurationError(f"invalid duration: '{value}'")
    duration = _DURATION_UNITS[match["unit"]] * float(match["value"])
    if duration <= timedelta(0):
        raise ConfigurationError(f"duration must be positive: '{value}'")
    return duration


def resolve_seed(seed: int) -> int:
    """Return seed, or a time-derived seed when seed is 0."""
    if seed == 0:
        return time.time_ns() % 1_000_000_000 or 1
    return seed


@dataclass(frozen=True)
class GenerationConfig:
    """Immutable settings for one data generation run.

    Attributes:
        format: Output bulk format (one of FORMAT_CHOICES).
        use_case: Synthetic model (one of USE_CASE_CHOICES).
        initial_scale_var: Hosts simulated in the first epoch.
        scale_var: Hosts simulated in the last epoch.
        timestamp_start: Start of simulated time (UTC).
        timestamp_end: End of simulated time (UTC).
        seed: PRNG seed, already resolved (never 0).
        interval: Sampling interval between host data points.
        group_id: Round-robin group this process serializes.
        total_groups: Number of round-robin groups.
        profile_file: Optional memory profile output path.
        debug: Debug verbosity (0, 1 or 2).
    """

    format: str
    use_case: str
    initial_scale_var: int
    scale_var: int
    timestamp_start: datetime
    timestamp_end: datetime
    seed: int
    interval: timedelta = timedelta(seconds=10)
    group_id: int = 0
    total_groups: int = 1
    profile_file: str | None = None
    debug: int = 0

    def validate(self) -> None:
        """Check every setting, raising ConfigurationError on the first problem."""
        validate_groups(self.group_id, self.total_groups)
        validate_format(self.format)
        validate_use_case(self.use_case)
        if self.scale_var < 1:
            raise ConfigurationError("scale var must be at least 1")
        if self.initial_scale_var < 0:
            raise ConfigurationError("initial scale var cannot be negative")
        if self.initial_scale_var > self.scale_var:
            raise ConfigurationError(
                f"initial scale var {self.initial_scale_var} "
                f"cannot be greater than scale var {self.scale_var}"
            )
        if self.interval <= timedelta(0):
            raise ConfigurationError("log interval must be positive")
        if self.timestamp_end < self.timestamp_start:
            raise ConfigurationError("timestamp end is before timestamp start")


@dataclass(frozen=True)
class DatabaseConfig:
    """Engine connection settings used when rendering queries.

    Attributes:
        db_name: Database the queries target.
        use_json_tags: TimescaleDB stores tags in a JSONB column.
        use_time_bucket: TimescaleDB groups with time_bucket() instead of
            date_trunc().
    """

    db_name: str = "benchmark"
    use_json_tags: bool = False
    use_time_bucket: bool = True


@dataclass(frozen=True)
class QueryGenerationConfig:
    """Immutable settings for one query generation run."""

    format: str
    query_type: str
    scale_var: int
    queries: int
    timestamp_start: datetime
    timestamp_end: datetime
    seed: int
    db_config: DatabaseConfig = DatabaseConfig()
    debug: int = 0

    def validate(self, query_types: tuple[str, ...]) -> None:
        """Check every setting against the known query types."""
        validate_format(self.format, QUERY_FORMAT_CHOICES)
        if self.query_type not in query_types:
            raise ConfigurationError(
                f"unknown query type: '{self.query_type}' "
                f"(valid choices: {', '.join(query_types)})"
            )
        if self.scale_var < 1:
            raise ConfigurationError("scale var must be at least 1")
        if self.queries < 0:
            raise ConfigurationError("query count cannot be negative")
        if self.timestamp_end <= self.timestamp_start:
            raise ConfigurationError("timestamp end must be after timestamp start")
