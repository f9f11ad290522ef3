"""NDJSON encoder for benchmark queries."""

import json

from tsloadgen.core.ports import Query


def encode_query(query: Query) -> str:
    """Encode one query as a single JSON line, newline included."""
    return json.dumps(query.to_dict(), sort_keys=True) + "\n"
