"""Tests for data types, vocabulary and configuration."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from auboutdufil.common.config import ServiceConfig
from auboutdufil.data_types import ZERO_DATETIME, SortMode, Track, TrackPayload
from auboutdufil.vocabulary import canonical_license, canonical_mood


class TestSortMode:
    @pytest.mark.parametrize("mode", list(SortMode))
    def test_route_round_trip(self, mode):
        assert SortMode.from_route(mode.route_prefix) is mode

    def test_unknown_route(self):
        assert SortMode.from_route("oldest") is None
        assert SortMode.from_route("") is None


class TestTrack:
    def test_defaults_are_not_found(self):
        track = Track()

        assert track.title is None
        assert track.rating is None
        assert track.genres == ()

    def test_negative_counts_are_rejected(self):
        with pytest.raises(ValidationError):
            Track(title="x", downloads=-1)

    def test_rating_is_bounded(self):
        assert Track(title="x", rating=5.0).rating == 5.0
        with pytest.raises(ValidationError):
            Track(title="x", rating=5.5)

    def test_is_frozen(self):
        track = Track(title="x")

        with pytest.raises(ValidationError):
            track.title = "y"

    def test_payload_collapses_missing_to_zero(self):
        assert Track(title="Only").to_payload() == TrackPayload(title="Only")
        assert TrackPayload().published_date == ZERO_DATETIME

    def test_payload_keeps_real_values(self):
        published = datetime(2016, 5, 12, tzinfo=timezone.utc)
        payload = Track(
            title="t", genres=("a", "b"), rating=0.0, published_date=published
        ).to_payload()

        assert payload.genres == ["a", "b"]
        assert payload.rating == 0.0
        assert payload.published_date == published

    def test_payload_json_has_every_key(self):
        data = Track(title="t").to_payload().model_dump(mode="json")

        assert data["published_date"].startswith("0001-01-01T00:00:00")
        assert data["download_url"] == ""
        assert len(data) == 11


class TestVocabulary:
    @pytest.mark.parametrize(
        "value,expected",
        [("by", "cc-by"), ("CC-BY-NC-SA", "cc-byncsa"), (" pd ", "cc0"), ("lal", "art-libre")],
    )
    def test_license_aliases(self, value, expected):
        assert canonical_license(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [("Triste", "sad"), ("upbeat", "happy"), ("sombre", "dark"), ("epic", "epic")],
    )
    def test_mood_aliases(self, value, expected):
        assert canonical_mood(value) == expected

    def test_unknown_values_are_unchanged(self):
        assert canonical_license("Custom-License") == "Custom-License"
        assert canonical_mood("pensive") == "pensive"


class TestServiceConfig:
    def test_defaults(self):
        config = ServiceConfig()

        assert config.base_url == "http://www.auboutdufil.com/index.php?"
        assert config.fetch_timeout == 15.0
        assert config.cache_ttl == 3600.0

    @pytest.mark.parametrize(
        "kwargs",
        [{"fetch_timeout": 0}, {"cache_ttl": -1}, {"cache_maxsize": 0}],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            ServiceConfig(**kwargs)
