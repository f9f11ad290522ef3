"""Tests for the reusable Point buffer."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from tests.helpers import START

from tsloadgen.core.models import Point

_names = st.text(min_size=1, max_size=12)
_values = st.one_of(
    st.integers(), st.floats(allow_nan=False), st.text(max_size=12), st.booleans()
)


class TestPointBuilders:
    """Tests for filling a Point."""

    @pytest.mark.tra("Core.Point.AppendTag")
    @pytest.mark.tier(0)
    def test_append_tag_keeps_insertion_order(self) -> None:
        """Tags come back in the order they were appended."""
        point = Point()
        point.append_tag("hostname", "host_0")
        point.append_tag("region", "eu-west-1")

        assert point.tags() == [("hostname", "host_0"), ("region", "eu-west-1")]

    @pytest.mark.tra("Core.Point.AppendField")
    @pytest.mark.tier(0)
    def test_append_field_keeps_insertion_order(self) -> None:
        """Fields come back in the order they were appended."""
        point = Point()
        point.append_field("usage_user", 58.1)
        point.append_field("usage_system", 2)

        assert point.fields() == [("usage_user", 58.1), ("usage_system", 2)]

    @pytest.mark.tra("Core.Point.Setters")
    @pytest.mark.tier(0)
    def test_setters_store_name_and_timestamp(self) -> None:
        point = Point()
        point.set_measurement_name("cpu")
        point.set_timestamp(START)

        assert point.measurement_name == "cpu"
        assert point.timestamp == START


class TestPointReset:
    """Tests for Point.reset()."""

    @pytest.mark.tra("Core.Point.Reset")
    @pytest.mark.tier(0)
    def test_reset_returns_to_fresh_state(self) -> None:
        """A reset point equals a freshly constructed one."""
        point = Point()
        point.set_measurement_name("cpu")
        point.set_timestamp(START)
        point.append_tag("hostname", "host_0")
        point.append_field("usage_user", 58.1)

        point.reset()

        assert point == Point()

    @pytest.mark.tra("Core.Point.Reset.ReusesStorage")
    @pytest.mark.tier(0)
    def test_reset_clears_lists_in_place(self) -> None:
        """Reset keeps the same list objects so the buffer is reused."""
        point = Point()
        tag_keys = point.tag_keys
        field_values = point.field_values
        point.append_tag("hostname", "host_0")
        point.append_field("usage_user", 1.0)

        point.reset()

        assert point.tag_keys is tag_keys
        assert point.field_values is field_values

    @pytest.mark.tra("Core.Point.Reset.NoLeak")
    @pytest.mark.tier(0)
    @given(
        tags=st.lists(st.tuples(_names, _names), max_size=8),
        fields=st.lists(st.tuples(_names, _values), max_size=8),
    )
    def test_reset_leaves_nothing_behind(
        self,
        tags: list[tuple[str, str]],
        fields: list[tuple[str, object]],
    ) -> None:
        """Whatever was written, nothing survives a reset."""
        point = Point()
        point.set_measurement_name("m")
        point.set_timestamp(START)
        for key, value in tags:
            point.append_tag(key, value)
        for key, value in fields:
            point.append_field(key, value)  # type: ignore[arg-type]

        point.reset()

        assert point == Point()
        assert point.tags() == []
        assert point.fields() == []
