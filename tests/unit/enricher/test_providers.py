"""Tests for provider response extraction."""

from __future__ import annotations

import pytest

from personspine.enricher.providers import (
    PROVIDERS,
    extract_age,
    extract_gender,
    extract_nationality,
    get_provider,
    parse_cached_age,
    parse_cached_text,
)
from personspine.protocols.enricher import AttributeKind


class TestExtractAge:
    """agify responses."""

    def test_age(self) -> None:
        assert extract_age({"count": 5, "name": "Zahar", "age": 35}) == 35

    @pytest.mark.parametrize("payload", [{"age": 0}, {"age": None}, {}, {"age": "35"}, [35]])
    def test_unusable(self, payload) -> None:
        """Zero, null, missing or non-integer ages have no value."""
        assert extract_age(payload) is None

    def test_bool_is_not_an_age(self) -> None:
        assert extract_age({"age": True}) is None


class TestExtractGender:
    """genderize responses."""

    def test_gender(self) -> None:
        assert extract_gender({"gender": "male", "probability": 0.99}) == "male"

    @pytest.mark.parametrize("payload", [{"gender": None}, {"gender": ""}, {}, "male"])
    def test_unusable(self, payload) -> None:
        assert extract_gender(payload) is None


class TestExtractNationality:
    """nationalize responses."""

    def test_first_country_wins(self) -> None:
        """The most probable (first) country is used."""
        payload = {
            "country": [
                {"country_id": "RU", "probability": 0.4},
                {"country_id": "UA", "probability": 0.2},
            ]
        }

        assert extract_nationality(payload) == "RU"

    def test_empty_country_list(self) -> None:
        """An empty list has no value."""
        assert extract_nationality({"country": []}) is None

    @pytest.mark.parametrize(
        "payload", [{}, {"country": None}, {"country": ["RU"]}, {"country": [{"country_id": ""}]}]
    )
    def test_unusable(self, payload) -> None:
        assert extract_nationality(payload) is None


class TestCachedValues:
    """Parsing values read back from the cache."""

    def test_cached_age(self) -> None:
        assert parse_cached_age("35") == 35

    @pytest.mark.parametrize("value", ["", "abc", "0"])
    def test_unreadable_cached_age(self, value: str) -> None:
        assert parse_cached_age(value) is None

    def test_cached_text(self) -> None:
        assert parse_cached_text("RU") == "RU"
        assert parse_cached_text("") is None


class TestProviderRegistry:
    """Provider lookup."""

    def test_one_provider_per_kind(self) -> None:
        assert set(PROVIDERS) == set(AttributeKind)

    def test_lookup_by_string(self) -> None:
        provider = get_provider("gender")

        assert provider.kind is AttributeKind.GENDER
        assert provider.default_url == "https://api.genderize.io/"

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValueError):
            get_provider("height")
