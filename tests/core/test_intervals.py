"""Tests for interval specification parsing."""

import pytest

from orderflow_tools.core.exceptions import InvalidIntervalSpecError
from orderflow_tools.core.intervals import IntervalSpec, parse_interval, resolve_interval_ms

_THIRTY_SECONDS_MS = 30_000
_ONE_MINUTE_MS = 60_000


class TestParseInterval:
    """Tests for parse_interval."""

    @pytest.mark.parametrize(
        ("spec", "expected_ms"),
        [
            ("30 seconds", _THIRTY_SECONDS_MS),
            ("30 second", _THIRTY_SECONDS_MS),
            ("30s", _THIRTY_SECONDS_MS),
            ("30S", _THIRTY_SECONDS_MS),
            ("1 minute", _ONE_MINUTE_MS),
            ("1m", _ONE_MINUTE_MS),
            ("1T", _ONE_MINUTE_MS),
            ("5 Minutes", 5 * _ONE_MINUTE_MS),
            ("2 hours", 2 * 60 * _ONE_MINUTE_MS),
            ("250ms", 250),
            ("  15   sec  ", 15_000),
        ],
    )
    def test_valid_specs(self, spec: str, expected_ms: int) -> None:
        """Resolve count and unit into milliseconds."""
        assert resolve_interval_ms(spec) == expected_ms

    def test_canonical_label(self) -> None:
        """Normalise unit aliases to a canonical label."""
        interval = parse_interval("30S")
        assert interval == IntervalSpec(count=30, unit="seconds", milliseconds=_THIRTY_SECONDS_MS)
        assert str(interval) == "30 seconds"

    @pytest.mark.parametrize(
        "spec",
        ["", "seconds", "30", "1.5 minutes", "thirty seconds", "30 fortnights", "30 s 2"],
    )
    def test_unparseable_specs_raise(self, spec: str) -> None:
        """Raise InvalidIntervalSpecError for malformed specifications."""
        with pytest.raises(InvalidIntervalSpecError):
            parse_interval(spec)

    @pytest.mark.parametrize("spec", ["0 seconds", "-5 minutes"])
    def test_non_positive_count_raises(self, spec: str) -> None:
        """Reject zero and negative counts."""
        with pytest.raises(InvalidIntervalSpecError, match="positive"):
            parse_interval(spec)

    def test_unknown_unit_lists_supported_units(self) -> None:
        """Mention the supported units in the error message."""
        with pytest.raises(InvalidIntervalSpecError, match="unknown unit 'days'") as exc_info:
            parse_interval("2 days")
        assert "minutes" in str(exc_info.value)
        assert exc_info.value.spec == "2 days"

    def test_non_string_raises(self) -> None:
        """Reject non-string specifications."""
        with pytest.raises(InvalidIntervalSpecError):
            parse_interval(30)  # type: ignore[arg-type]

    def test_error_is_a_value_error(self) -> None:
        """Let callers catch interval errors as ValueError."""
        with pytest.raises(ValueError, match="Invalid interval"):
            resolve_interval_ms("bogus")
