"""Generation driver: simulator -> group partitioner -> serializer -> sink.

Every worker process regenerates the full logical stream from the same seed
and keeps only the records whose round-robin slot matches its group id.
Because the counter only advances on produced records, all workers agree on
the slot of every record without communicating.
"""

import logging
from collections.abc import Sequence
from typing import BinaryIO

from tsloadgen.core.config import validate_groups
from tsloadgen.core.models import Point
from tsloadgen.core.ports import PointSerializer, Simulator

logger = logging.getLogger(__name__)

SCHEMA_TAGS_MARKER = b"tags"


class GenerationError(RuntimeError):
    """Raised when writing generated records to the output sink fails."""


def run_simulator(
    sim: Simulator,
    serializer: PointSerializer,
    out: BinaryIO,
    group_id: int = 0,
    total_groups: int = 1,
) -> int:
    """Drive sim to completion, serializing the records owned by group_id.

    Args:
        sim: Simulator producing the logical point stream.
        serializer: Encoder for the target bulk format.
        out: Binary sink receiving the encoded records.
        group_id: Round-robin group (0-indexed) this process serializes.
        total_groups: Number of round-robin groups.

    Returns:
        Number of records written to out.

    Raises:
        ConfigurationError: If the group settings are invalid.
        GenerationError: If the serializer fails to write a record.
    """
    validate_groups(group_id, total_groups)

    current_group = 0
    written = 0
    point = Point()
    while not sim.finished():
        if not sim.next(point):
            point.reset()
            continue

        # in the default case this is always true
        if current_group == group_id:
            try:
                serializer.serialize(point, out)
            except OSError as exc:
                raise GenerationError(f"failed to write record: {exc}") from exc
            written += 1
        point.reset()

        current_group = (current_group + 1) % total_groups

    logger.debug(
        "simulator finished",
        extra={"records": written, "group_id": group_id, "total_groups": total_groups},
    )
    return written


def write_schema_header(
    sim: Simulator, tag_keys: Sequence[str], out: BinaryIO
) -> None:
    """Write the schema preamble required by header-based formats.

    The preamble is a "tags" line listing tag_keys in the given order, one
    line per measurement (sorted by name) listing its field names, and a
    blank line.

    Raises:
        GenerationError: If writing to out fails.
    """
    lines = [b",".join([SCHEMA_TAGS_MARKER, *(key.encode() for key in tag_keys)])]
    fields = sim.fields()
    # sort the measurement names so the header is deterministic
    for measurement_name in sorted(fields):
        lines.append(
            b",".join(
                [
                    measurement_name.encode(),
                    *(field.encode() for field in fields[measurement_name]),
                ]
            )
        )
    try:
        out.write(b"\n".join(lines) + b"\n\n")
    except OSError as exc:
        raise GenerationError(f"failed to write schema header: {exc}") from exc
