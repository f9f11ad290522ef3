"""Shared test fixtures for all test modules."""

import io
from collections.abc import Callable
from dataclasses import replace
from datetime import timedelta

import pytest
from tests.helpers import ONE_MINUTE_END, START

from tsloadgen.core.config import GenerationConfig


@pytest.fixture
def generation_config() -> Callable[..., GenerationConfig]:
    """Factory fixture for GenerationConfig with small, fast defaults.

    Usage:
        config = generation_config(use_case="devops", scale_var=3)
    """
    base = GenerationConfig(
        format="influx",
        use_case="cpu-single",
        initial_scale_var=1,
        scale_var=1,
        timestamp_start=START,
        timestamp_end=ONE_MINUTE_END,
        seed=42,
        interval=timedelta(seconds=10),
    )

    def _config(**overrides: object) -> GenerationConfig:
        return replace(base, **overrides)

    return _config


@pytest.fixture
def data_cli() -> Callable[..., tuple[int, bytes]]:
    """Run tsloadgen-data in-process and return (exit status, stdout bytes)."""
    from tsloadgen.adapters.cli.generate_data import main

    def _run(*args: str) -> tuple[int, bytes]:
        out = io.BytesIO()
        status = main(list(args), stdout=out)
        return status, out.getvalue()

    return _run


@pytest.fixture
def queries_cli() -> Callable[..., tuple[int, str]]:
    """Run tsloadgen-queries in-process and return (exit status, stdout text)."""
    from tsloadgen.adapters.cli.generate_queries import main

    def _run(*args: str) -> tuple[int, str]:
        out = io.StringIO()
        status = main(list(args), stdout=out)
        return status, out.getvalue()

    return _run
