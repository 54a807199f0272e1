"""Unit tests for earthquake parsing and age filtering.

These tests demonstrate the benefit of the Functional Core pattern:
- No mocks needed
- Fast, deterministic execution
- Simple assertions on pure functions
"""

import json

import pytest

from quakemap.core.earthquake import (
    MAX_AGE_MINUTES,
    PLACEHOLDER_TITLE,
    Earthquake,
    filter_by_age,
    parse_earthquake,
    parse_earthquakes,
    sort_newest_first,
)


# Sample USGS GeoJSON feature for testing
SAMPLE_FEATURE = {
    "type": "Feature",
    "id": "nc75095866",
    "properties": {
        "mag": 6.1,
        "place": "Test City",
        "time": 1700000000000,
        "url": "https://earthquake.usgs.gov/earthquakes/eventpage/nc75095866",
    },
    "geometry": {
        "type": "Point",
        "coordinates": [-122.4, 37.8, 10.5],  # lon, lat, depth
    },
}


def _feature(**overrides):
    """Copy SAMPLE_FEATURE with top-level keys replaced."""
    return {**SAMPLE_FEATURE, **overrides}


def _with_props(**props):
    return _feature(properties={**SAMPLE_FEATURE["properties"], **props})


def _feed(*features) -> str:
    return json.dumps({"type": "FeatureCollection", "features": list(features)})


class TestParseEarthquake:
    """Tests for parse_earthquake() pure function."""

    def test_parses_valid_feature(self):
        """Should parse a valid GeoJSON feature into Earthquake."""
        result = parse_earthquake(SAMPLE_FEATURE)

        assert result is not None
        assert result.longitude == -122.4
        assert result.latitude == 37.8
        assert result.magnitude == 6.1
        assert result.title == "Test City"
        assert result.occurred_at_ms == 1700000000000
        assert result.url == SAMPLE_FEATURE["properties"]["url"]

    def test_accepts_two_element_coordinates(self):
        """Depth is optional; longitude and latitude are enough."""
        feature = _feature(geometry={"type": "Point", "coordinates": [10.0, 20.0]})
        result = parse_earthquake(feature)

        assert result is not None
        assert result.coordinates == (20.0, 10.0)

    def test_missing_place_uses_placeholder(self):
        """Should fall back to N/A when place is absent."""
        props = {k: v for k, v in SAMPLE_FEATURE["properties"].items() if k != "place"}
        result = parse_earthquake(_feature(properties=props))

        assert result is not None
        assert result.title == PLACEHOLDER_TITLE

    def test_null_place_uses_placeholder(self):
        """Should fall back to N/A when place is null."""
        result = parse_earthquake(_with_props(place=None))

        assert result is not None
        assert result.title == "N/A"

    def test_accepts_numeric_strings(self):
        """Magnitude and time encoded as strings are parsed."""
        result = parse_earthquake(_with_props(mag="4.5", time="1700000000000"))

        assert result is not None
        assert result.magnitude == 4.5
        assert result.occurred_at_ms == 1700000000000

    def test_accepts_negative_magnitude(self):
        """Negative magnitudes occur in real feeds and are kept."""
        result = parse_earthquake(_with_props(mag=-0.8))

        assert result is not None
        assert result.magnitude == -0.8

    def test_truncates_float_time(self):
        """A float time is truncated to whole milliseconds."""
        result = parse_earthquake(_with_props(time=1700000000000.9))

        assert result is not None
        assert result.occurred_at_ms == 1700000000000

    @pytest.mark.parametrize("mag", [
        None, "strong", True, [5.0], {"value": 5}, "nan", "inf", float("inf"), 10 ** 400,
    ])
    def test_rejects_bad_magnitude(self, mag):
        """Should return None if magnitude is not a finite number."""
        assert parse_earthquake(_with_props(mag=mag)) is None

    @pytest.mark.parametrize("time", [None, "yesterday", "1.5", False, float("nan")])
    def test_rejects_bad_time(self, time):
        """Should return None if time is not an integer."""
        assert parse_earthquake(_with_props(time=time)) is None

    def test_rejects_missing_geometry(self):
        """Should return None if geometry is missing."""
        feature = {k: v for k, v in SAMPLE_FEATURE.items() if k != "geometry"}
        assert parse_earthquake(feature) is None

    def test_rejects_missing_properties(self):
        """Should return None if properties are missing."""
        feature = {k: v for k, v in SAMPLE_FEATURE.items() if k != "properties"}
        assert parse_earthquake(feature) is None

    def test_rejects_non_point_geometry(self):
        """Only Point geometries are accepted."""
        feature = _feature(geometry={"type": "LineString", "coordinates": [[0, 0], [1, 1]]})
        assert parse_earthquake(feature) is None

    @pytest.mark.parametrize("coords", [
        None, [], [1.0], "1,2", [1.0, "2.0"], [None, 2.0],
        [10 ** 400, 37.8], [-122.4, -(10 ** 400)], [float("nan"), 37.8], [-122.4, float("inf")],
    ])
    def test_rejects_bad_coordinates(self, coords):
        """Should return None if coordinates are missing, non-numeric or too large."""
        feature = _feature(geometry={"type": "Point", "coordinates": coords})
        assert parse_earthquake(feature) is None

    def test_rejects_non_dict_feature(self):
        """Non-object features are skipped."""
        assert parse_earthquake("feature") is None
        assert parse_earthquake(None) is None

    def test_keeps_out_of_range_coordinates(self):
        """Coordinates are not range-checked."""
        feature = _feature(geometry={"type": "Point", "coordinates": [200.0, -95.0]})
        result = parse_earthquake(feature)

        assert result is not None
        assert result.longitude == 200.0
        assert result.latitude == -95.0


class TestParseEarthquakes:
    """Tests for parse_earthquakes() pure function."""

    def test_parses_feed_text(self):
        """Should parse exactly one event from a one-feature feed."""
        result = parse_earthquakes(_feed(SAMPLE_FEATURE))

        assert result == {
            Earthquake(
                latitude=37.8,
                longitude=-122.4,
                magnitude=6.1,
                title="Test City",
                occurred_at_ms=1700000000000,
            )
        }

    def test_skips_malformed_features(self):
        """Three features with one malformed yields two events."""
        second = _with_props(place="Other City", time=1700000060000)
        broken = {k: v for k, v in SAMPLE_FEATURE.items() if k != "geometry"}

        result = parse_earthquakes(_feed(SAMPLE_FEATURE, broken, second))

        assert len(result) == 2
        assert {e.title for e in result} == {"Test City", "Other City"}

    def test_oversized_numbers_skip_only_their_feature(self):
        """A feature with an out-of-range number does not stop the parse."""
        huge = _feature(geometry={"type": "Point", "coordinates": [int("9" * 400), 37.8]})
        second = _with_props(place="Other City", mag=int("9" * 400))

        result = parse_earthquakes(_feed(huge, SAMPLE_FEATURE, second))

        assert {e.title for e in result} == {"Test City"}

    def test_deduplicates_identical_events(self):
        """Structurally equal events collapse into one."""
        result = parse_earthquakes(_feed(SAMPLE_FEATURE, SAMPLE_FEATURE))
        assert len(result) == 1

    def test_url_does_not_affect_identity(self):
        """Events differing only by URL are duplicates."""
        other = _with_props(url="https://example.com/other")
        result = parse_earthquakes(_feed(SAMPLE_FEATURE, other))
        assert len(result) == 1

    @pytest.mark.parametrize("raw_text", [
        "",
        "not json at all",
        "[1, 2, 3]",
        "null",
        '{"type": "FeatureCollection"}',
        '{"features": {"not": "a list"}}',
        '{"features": []}',
        '{"features": [1, "two", null]}',
        "[" * 100_000,
        '{"features": [' * 100_000,
        _feed(_with_props(mag=10 ** 400)),
        _feed(_feature(geometry={"type": "Point", "coordinates": [10 ** 400, 37.8]})),
    ])
    def test_never_raises(self, raw_text):
        """Any input text gives a (possibly empty) set."""
        assert parse_earthquakes(raw_text) == frozenset()

    def test_returns_frozenset(self):
        """Parsed collection is immutable."""
        assert isinstance(parse_earthquakes(_feed(SAMPLE_FEATURE)), frozenset)


class TestFilterByAge:
    """Tests for filter_by_age() pure function."""

    NOW_MS = 1700000000000

    @pytest.fixture
    def earthquakes(self):
        """Events 1, 10 and 1000 minutes before NOW_MS."""
        return frozenset(
            Earthquake(
                latitude=0.0,
                longitude=0.0,
                magnitude=3.0,
                title=f"{minutes} min ago",
                occurred_at_ms=self.NOW_MS - minutes * 60_000,
            )
            for minutes in (1, 10, 1000)
        )

    def test_keeps_events_within_age(self, earthquakes):
        """Events at most max_age_minutes old are kept."""
        result = filter_by_age(earthquakes, 10, self.NOW_MS)

        assert {e.title for e in result} == {"1 min ago", "10 min ago"}

    def test_cutoff_is_inclusive(self, earthquakes):
        """An event exactly at the cutoff is kept."""
        result = filter_by_age(earthquakes, 1000, self.NOW_MS)
        assert len(result) == 3

    def test_maximum_age_keeps_week(self, earthquakes):
        """The 7-day maximum keeps everything in the weekly feed."""
        assert filter_by_age(earthquakes, MAX_AGE_MINUTES, self.NOW_MS) == earthquakes

    def test_does_not_mutate_source(self, earthquakes):
        """Source collection is unchanged."""
        source = set(earthquakes)
        filter_by_age(source, 5, self.NOW_MS)
        assert source == set(earthquakes)

    def test_empty_input(self):
        """No events in, no events out."""
        assert filter_by_age([], 60, self.NOW_MS) == frozenset()


class TestEarthquakeModel:
    """Tests for Earthquake dataclass."""

    def test_is_immutable(self):
        """Earthquake should be immutable (frozen)."""
        eq = parse_earthquake(SAMPLE_FEATURE)
        assert eq is not None

        with pytest.raises(Exception):  # FrozenInstanceError
            eq.magnitude = 5.0  # type: ignore

    def test_sort_newest_first(self):
        """Should sort by time, newest first."""
        older = parse_earthquake(_with_props(time=1699990000000, place="Older"))
        newer = parse_earthquake(SAMPLE_FEATURE)

        assert sort_newest_first([older, newer]) == [newer, older]
