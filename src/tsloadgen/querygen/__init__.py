"""Per-engine benchmark query generators for the devops data set."""

from tsloadgen.querygen.registry import QUERY_TYPES, get_query_generator

__all__ = ["QUERY_TYPES", "get_query_generator"]
