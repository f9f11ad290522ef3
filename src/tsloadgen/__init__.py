"""Synthetic workload generator for time-series database benchmarks."""

from tsloadgen.core.config import ConfigurationError, GenerationConfig
from tsloadgen.core.driver import GenerationError, run_simulator, write_schema_header
from tsloadgen.core.models import Point

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "GenerationConfig",
    "GenerationError",
    "Point",
    "run_simulator",
    "write_schema_header",
]
