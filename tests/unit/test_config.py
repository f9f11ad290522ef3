"""Tests for startup configuration parsing and validation."""

from datetime import datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tsloadgen.core.config import (
    FORMAT_CHOICES,
    USE_CASE_CHOICES,
    ConfigurationError,
    DatabaseConfig,
    QueryGenerationConfig,
    parse_duration,
    parse_timestamp,
    resolve_seed,
    validate_format,
    validate_groups,
    validate_use_case,
)


class TestValidateGroups:
    """Tests for validate_groups()."""

    @pytest.mark.tra("Config.Groups.TotalZero")
    @pytest.mark.tier(0)
    @given(group_id=st.integers(min_value=0, max_value=1000))
    def test_zero_total_groups_always_fails(self, group_id: int) -> None:
        with pytest.raises(ConfigurationError, match="total groups = 0"):
            validate_groups(group_id, 0)

    @pytest.mark.tra("Config.Groups.IdTooLarge")
    @pytest.mark.tier(0)
    @given(
        total=st.integers(min_value=1, max_value=1000),
        excess=st.integers(min_value=0, max_value=1000),
    )
    def test_group_id_at_or_above_total_fails(self, total: int, excess: int) -> None:
        """group_id == total and group_id > total are both rejected."""
        with pytest.raises(ConfigurationError, match=f"id {total + excess} >= total"):
            validate_groups(total + excess, total)

    @pytest.mark.tra("Config.Groups.LastIdValid")
    @pytest.mark.tier(0)
    @given(total=st.integers(min_value=1, max_value=1000))
    def test_last_group_id_is_valid(self, total: int) -> None:
        validate_groups(total - 1, total)

    @pytest.mark.tra("Config.Groups.Message")
    @pytest.mark.tier(0)
    def test_error_message_names_both_values(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            validate_groups(3, 2)
        assert str(exc_info.value) == (
            "incorrect interleaved groups configuration: id 3 >= total groups 2"
        )


class TestValidateChoices:
    """Tests for format and use case validation."""

    @pytest.mark.tra("Config.Format.Valid")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize("fmt", FORMAT_CHOICES)
    def test_known_formats_pass(self, fmt: str) -> None:
        validate_format(fmt)

    @pytest.mark.tra("Config.Format.Invalid")
    @pytest.mark.tier(0)
    def test_unknown_format_lists_choices(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            validate_format("csv")
        message = str(exc_info.value)
        assert message.startswith("invalid format specifier: csv")
        for fmt in FORMAT_CHOICES:
            assert fmt in message

    @pytest.mark.tra("Config.UseCase.Valid")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize("use_case", USE_CASE_CHOICES)
    def test_known_use_cases_pass(self, use_case: str) -> None:
        validate_use_case(use_case)

    @pytest.mark.tra("Config.UseCase.Invalid")
    @pytest.mark.tier(0)
    def test_unknown_use_case_fails(self) -> None:
        with pytest.raises(ConfigurationError, match="unknown use case: 'iot'"):
            validate_use_case("iot")


class TestParsing:
    """Tests for timestamp, duration and seed parsing."""

    @pytest.mark.tra("Config.Timestamp.Utc")
    @pytest.mark.tier(0)
    def test_parse_timestamp_with_z_suffix(self) -> None:
        assert parse_timestamp("2016-01-01T00:00:00Z") == datetime(
            2016, 1, 1, tzinfo=timezone.utc
        )

    @pytest.mark.tra("Config.Timestamp.Normalize")
    @pytest.mark.tier(0)
    def test_parse_timestamp_normalizes_offset_to_utc(self) -> None:
        parsed = parse_timestamp("2016-01-01T02:00:00+02:00")

        assert parsed == datetime(2016, 1, 1, tzinfo=timezone.utc)
        assert parsed.utcoffset() == timedelta(0)

    @pytest.mark.tra("Config.Timestamp.Invalid")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize(
        "value",
        [
            "yesterday",
            "2016-13-01T00:00:00Z",
            "",
            "20160101T000000Z",
            "2016-01-01 00:00:00Z",
            "2016-01-01T00:00:00Z\n",
        ],
    )
    def test_parse_timestamp_rejects_garbage(self, value: str) -> None:
        with pytest.raises(ConfigurationError, match="invalid timestamp"):
            parse_timestamp(value)

    @pytest.mark.tra("Config.Timestamp.Naive")
    @pytest.mark.tier(0)
    def test_parse_timestamp_requires_offset(self) -> None:
        with pytest.raises(ConfigurationError, match="no UTC offset"):
            parse_timestamp("2016-01-01T00:00:00")

    @pytest.mark.tra("Config.Duration")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("10s", timedelta(seconds=10)),
            ("500ms", timedelta(milliseconds=500)),
            ("1m", timedelta(minutes=1)),
            ("2h", timedelta(hours=2)),
            ("1.5s", timedelta(seconds=1.5)),
        ],
    )
    def test_parse_duration(self, value: str, expected: timedelta) -> None:
        assert parse_duration(value) == expected

    @pytest.mark.tra("Config.Duration.Invalid")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize("value", ["10", "s", "-1s", "0s", "10d"])
    def test_parse_duration_rejects_invalid(self, value: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_duration(value)

    @pytest.mark.tra("Config.Seed.Explicit")
    @pytest.mark.tier(0)
    def test_explicit_seed_is_kept(self) -> None:
        assert resolve_seed(42) == 42

    @pytest.mark.tra("Config.Seed.FromTime")
    @pytest.mark.tier(0)
    def test_zero_seed_is_derived_from_time(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("time.time_ns", lambda: 1_451_606_400_123_456_789)
        assert resolve_seed(0) == 123_456_789


class TestGenerationConfig:
    """Tests for GenerationConfig.validate()."""

    @pytest.mark.tra("Config.Generation.Valid")
    @pytest.mark.tier(0)
    def test_default_test_config_is_valid(self, generation_config) -> None:
        generation_config().validate()

    @pytest.mark.tra("Config.Generation.Frozen")
    @pytest.mark.tier(0)
    def test_config_is_immutable(self, generation_config) -> None:
        config = generation_config()
        with pytest.raises(AttributeError):
            config.seed = 7

    @pytest.mark.tra("Config.Generation.Invalid")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"total_groups": 0}, "total groups = 0"),
            ({"group_id": 2, "total_groups": 2}, "id 2 >= total groups 2"),
            ({"format": "csv"}, "invalid format specifier"),
            ({"use_case": "iot"}, "unknown use case"),
            ({"scale_var": 0, "initial_scale_var": 0}, "scale var must be at least 1"),
            ({"initial_scale_var": -3, "scale_var": 2}, "cannot be negative"),
            ({"initial_scale_var": 5, "scale_var": 2}, "cannot be greater"),
            ({"interval": timedelta(0)}, "interval must be positive"),
            (
                {"timestamp_end": datetime(2015, 1, 1, tzinfo=timezone.utc)},
                "end is before",
            ),
        ],
    )
    def test_invalid_settings_raise(
        self, generation_config, overrides: dict[str, object], message: str
    ) -> None:
        with pytest.raises(ConfigurationError, match=message):
            generation_config(**overrides).validate()


class TestQueryGenerationConfig:
    """Tests for QueryGenerationConfig.validate()."""

    def _config(self, **overrides: object) -> QueryGenerationConfig:
        settings: dict[str, object] = {
            "format": "timescaledb",
            "query_type": "high-cpu-1",
            "scale_var": 4,
            "queries": 10,
            "timestamp_start": datetime(2016, 1, 1, tzinfo=timezone.utc),
            "timestamp_end": datetime(2016, 1, 2, tzinfo=timezone.utc),
            "seed": 1,
        }
        settings.update(overrides)
        return QueryGenerationConfig(**settings)  # type: ignore[arg-type]

    @pytest.mark.tra("Config.Queries.Valid")
    @pytest.mark.tier(0)
    def test_valid_config_passes(self) -> None:
        self._config().validate(("high-cpu-1",))

    @pytest.mark.tra("Config.Queries.DefaultDatabase")
    @pytest.mark.tier(0)
    def test_default_database_config(self) -> None:
        assert self._config().db_config == DatabaseConfig(
            db_name="benchmark", use_json_tags=False, use_time_bucket=True
        )

    @pytest.mark.tra("Config.Queries.Invalid")
    @pytest.mark.tier(0)
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"format": "mongo"}, "invalid format specifier"),
            ({"query_type": "lastpoint"}, "unknown query type"),
            ({"scale_var": 0}, "scale var"),
            ({"queries": -1}, "cannot be negative"),
            (
                {"timestamp_end": datetime(2016, 1, 1, tzinfo=timezone.utc)},
                "must be after",
            ),
        ],
    )
    def test_invalid_settings_raise(
        self, overrides: dict[str, object], message: str
    ) -> None:
        with pytest.raises(ConfigurationError, match=message):
            self._config(**overrides).validate(("high-cpu-1",))
