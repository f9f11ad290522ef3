"""Example: generate one data set with several worker processes.

Run with:
    python examples/partitioned_generation.py [workers] [output_dir]

Each worker regenerates the same seeded stream and keeps every N-th record,
writing its share to <output_dir>/devops-<group>.influx. Loading all files
gives the same rows as a single-process run; interleaving their lines
record by record gives the same order.

Equivalent shell invocation:
    for g in 0 1 2 3; do
        tsloadgen-data --format=influx --use-case=devops --scale-var=100 \\
            --seed=123 --interleaved-generation-group-id=$g \\
            --interleaved-generation-groups=4 > devops-$g.influx &
    done; wait
"""

import sys
from concurrent.futures import ProcessPoolExecutor
from dataclasses import replace
from datetime import timedelta
from pathlib import Path

from tsloadgen.adapters.cli.generate_data import generate
from tsloadgen.adapters.logging import configure_logging
from tsloadgen.core.config import GenerationConfig, parse_timestamp

BASE_CONFIG = GenerationConfig(
    format="influx",
    use_case="devops",
    initial_scale_var=100,
    scale_var=100,
    timestamp_start=parse_timestamp("2016-01-01T00:00:00Z"),
    timestamp_end=parse_timestamp("2016-01-01T01:00:00Z"),
    seed=123,
    interval=timedelta(seconds=10),
)


def generate_group(config: GenerationConfig, path: Path) -> int:
    """Write one group's share of the data set to path."""
    with path.open("wb") as out:
        return generate(config, out)


def main(workers: int, output_dir: Path) -> None:
    logger = configure_logging()
    output_dir.mkdir(parents=True, exist_ok=True)

    configs = [
        replace(BASE_CONFIG, group_id=group_id, total_groups=workers)
        for group_id in range(workers)
    ]
    paths = [output_dir / f"devops-{c.group_id}.influx" for c in configs]

    with ProcessPoolExecutor(max_workers=workers) as pool:
        counts = list(pool.map(generate_group, configs, paths))

    for path, count in zip(paths, counts):
        logger.info("group written", extra={"path": str(path), "records": count})
    logger.info("data set written", extra={"records": sum(counts)})


if __name__ == "__main__":
    main(
        int(sys.argv[1]) if len(sys.argv) > 1 else 4,
        Path(sys.argv[2]) if len(sys.argv) > 2 else Path("out"),
    )
