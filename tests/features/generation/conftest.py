"""BDD step definitions for partitioned generation features."""

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from tsloadgen.devops import MACHINE_TAG_KEYS


@dataclass
class GenerationScenarioContext:
    """State shared between the steps of one scenario."""

    use_case: str = ""
    seed: int = 0
    start: str = ""
    end: str = ""
    interval: str = "10s"
    outputs: dict[int, bytes] = field(default_factory=dict)
    status: int | None = None
    last_output: bytes = b""


@pytest.fixture
def ctx() -> GenerationScenarioContext:
    """Fresh scenario context for each test."""
    return GenerationScenarioContext()


def _run(
    ctx: GenerationScenarioContext,
    data_cli: Callable[..., tuple[int, bytes]],
    fmt: str,
    group_id: int,
    total_groups: int,
) -> tuple[int, bytes]:
    return data_cli(
        f"--format={fmt}",
        f"--use-case={ctx.use_case}",
        "--scale-var=1",
        f"--seed={ctx.seed}",
        f"--timestamp-start={ctx.start}",
        f"--timestamp-end={ctx.end}",
        f"--log-interval={ctx.interval}",
        f"--interleaved-generation-group-id={group_id}",
        f"--interleaved-generation-groups={total_groups}",
    )


def _records(output: bytes) -> list[bytes]:
    return output.splitlines()


# === Background Steps ===
@given(parsers.parse('a {use_case} run with seed {seed:d} from "{start}" to "{end}"'))
def step_run(
    ctx: GenerationScenarioContext, use_case: str, seed: int, start: str, end: str
) -> None:
    ctx.use_case = use_case
    ctx.seed = seed
    ctx.start = start
    ctx.end = end


@given(parsers.parse('a log interval of "{interval}"'))
def step_interval(ctx: GenerationScenarioContext, interval: str) -> None:
    ctx.interval = interval


# === Actions ===
@when(parsers.parse("I generate {fmt} data for group {group_id:d} of {total:d}"))
def step_generate(
    ctx: GenerationScenarioContext,
    data_cli: Callable[..., tuple[int, bytes]],
    fmt: str,
    group_id: int,
    total: int,
) -> None:
    ctx.status, ctx.last_output = _run(ctx, data_cli, fmt, group_id, total)
    ctx.outputs[group_id] = ctx.last_output


# === Assertions ===
@then("the run succeeds")
def step_succeeds(ctx: GenerationScenarioContext) -> None:
    assert ctx.status == 0


@then("the run fails")
def step_fails(ctx: GenerationScenarioContext) -> None:
    assert ctx.status != 0


@then("nothing is written")
def step_nothing_written(ctx: GenerationScenarioContext) -> None:
    assert ctx.last_output == b""


@then(parsers.parse("{count:d} records are written"))
def step_record_count(ctx: GenerationScenarioContext, count: int) -> None:
    assert len(_records(ctx.last_output)) == count


@then("every record has the same host and field names")
def step_same_identity(ctx: GenerationScenarioContext) -> None:
    series = set()
    field_names = set()
    for line in _records(ctx.last_output):
        key, fields, _timestamp = line.split(b" ")
        series.add(key)
        field_names.add(tuple(pair.split(b"=")[0] for pair in fields.split(b",")))
    assert len(series) == 1
    assert field_names == {(b"usage_user",)}


@then(parsers.parse("group {group_id:d} wrote {count:d} records"))
def step_group_count(
    ctx: GenerationScenarioContext, group_id: int, count: int
) -> None:
    assert len(_records(ctx.outputs[group_id])) == count


@then("the groups together cover the single-group output with no overlap")
def step_cover(
    ctx: GenerationScenarioContext, data_cli: Callable[..., tuple[int, bytes]]
) -> None:
    status, single = _run(ctx, data_cli, "influx", 0, 1)
    assert status == 0
    groups = [set(_records(ctx.outputs[g])) for g in sorted(ctx.outputs)]
    assert not set.intersection(*groups)
    assert set.union(*groups) == set(_records(single))


@then("the output starts with the schema header")
def step_schema_header(ctx: GenerationScenarioContext) -> None:
    header = b",".join([b"tags", *(key.encode() for key in MACHINE_TAG_KEYS)])
    assert ctx.last_output.startswith(header + b"\ncpu,usage_user\n\n")
