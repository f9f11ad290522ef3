"""Reusable benchmark query containers, one per target engine.

Query objects are owned by a QueryPool and recycled between dispatches,
so every container implements reset() returning it to an empty state.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class TimescaleDBQuery:
    """A SQL query against a TimescaleDB hypertable.

    Attributes:
        id: Sequence number assigned by the generator.
        human_label: Short label shared by all queries of one type.
        human_description: Label plus the concrete parameters used.
        hypertable: Hypertable the query reads from.
        sql_query: The SQL text.
    """

    id: int = 0
    human_label: str = ""
    human_description: str = ""
    hypertable: str = ""
    sql_query: str = ""

    def reset(self) -> None:
        self.id = 0
        self.human_label = ""
        self.human_description = ""
        self.hypertable = ""
        self.sql_query = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "engine": "timescaledb",
            "human_label": self.human_label,
            "human_description": self.human_description,
            "hypertable": self.hypertable,
            "sql_query": self.sql_query,
        }


@dataclass
class InfluxQuery:
    """An HTTP request against the InfluxDB query endpoint.

    Attributes:
        id: Sequence number assigned by the generator.
        human_label: Short label shared by all queries of one type.
        human_description: Label plus the concrete parameters used.
        method: HTTP method.
        path: Request path including the URL-encoded InfluxQL query.
        body: Request body (empty for GET queries).
    """

    id: int = 0
    human_label: str = ""
    human_description: str = ""
    method: str = ""
    path: str = ""
    body: str = ""

    def reset(self) -> None:
        self.id = 0
        self.human_label = ""
        self.human_description = ""
        self.method = ""
        self.path = ""
        self.body = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "engine": "influx",
            "human_label": self.human_label,
            "human_description": self.human_description,
            "method": self.method,
            "path": self.path,
            "body": self.body,
        }
