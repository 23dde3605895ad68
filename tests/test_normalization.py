"""Unit tests for date, label, title and matching-key normalization."""

from __future__ import annotations

import pytest

from hot_ones_catalog.utils.normalization import (
    build_search_url,
    clean_episode_title,
    episode_lookup_keys,
    find_air_date,
    generate_matching_keys,
    parse_air_date,
    parse_episode_number,
    parse_season_number,
    strip_stop_words,
)


class TestAirDates:
    def test_full_month_name(self) -> None:
        assert parse_air_date("August 4, 2025") == "2025-08-04"

    def test_abbreviated_month_name(self) -> None:
        assert parse_air_date("Aug 4, 2025") == "2025-08-04"

    def test_unparseable_date_is_returned_unchanged(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert parse_air_date("Smarch 40, 2025") == "Smarch 40, 2025"
        assert "Failed to parse date" in capsys.readouterr().err

    def test_find_air_date_uses_first_date_shaped_text(self) -> None:
        candidates = ["Season Premiere", "January 1, 2020", "February 2, 2021"]
        assert find_air_date(candidates) == "2020-01-01"

    def test_find_air_date_requires_full_match(self) -> None:
        assert find_air_date(["Aired January 1, 2020", "YouTube"]) == ""

    def test_find_air_date_keeps_unparseable_match(self) -> None:
        assert find_air_date(["Smarch 40, 2020"]) == "Smarch 40, 2020"

    def test_find_air_date_without_candidates(self) -> None:
        assert find_air_date([]) == ""


class TestLabels:
    @pytest.mark.parametrize("label, expected", [
        ("S1E1", 1),
        ("S01E05", 5),
        ("S12E104", 104),
        ("Special", 0),
        ("", 0),
    ])
    def test_parse_episode_number(self, label: str, expected: int) -> None:
        assert parse_episode_number(label) == expected

    @pytest.mark.parametrize("text, expected", [
        ("Season 1", 1),
        ("Season 27", 27),
        ("Specials", 0),
    ])
    def test_parse_season_number(self, text: str, expected: int) -> None:
        assert parse_season_number(text) == expected


class TestMatchingKeys:
    def test_keys_for_separated_title(self) -> None:
        keys = generate_matching_keys("Jane Doe | Hot Ones")
        assert keys[0] == "jane doe | hot ones"
        assert "jane doe" in keys

    def test_keys_strip_show_prefix(self) -> None:
        keys = generate_matching_keys("Hot Ones: Guest A | Season X")
        assert "guest a | season x" in keys
        assert "hot ones: guest a" in keys
        assert "guest | season x" in keys

    def test_first_we_feast_prefix(self) -> None:
        keys = generate_matching_keys("First We Feast - Sauce Tasting")
        assert "sauce tasting" in keys

    def test_eats_separator(self) -> None:
        keys = generate_matching_keys("Gordon Ramsay Eats Spicy Wings")
        assert "gordon ramsay" in keys

    def test_short_cleaned_keys_are_dropped(self) -> None:
        # "the a" cleans down to an empty key
        assert generate_matching_keys("The A-Team") == ["the a-team", "the a", "-team"]

    def test_keys_are_unique(self) -> None:
        keys = generate_matching_keys("Jane Doe | Hot Ones")
        assert len(keys) == len(set(keys))

    def test_strip_stop_words(self) -> None:
        assert strip_stop_words("the rock and   the roll") == "rock roll"
        # Word-bounded: "another" keeps its "an"
        assert strip_stop_words("another guest") == "another guest"

    def test_episode_lookup_keys(self) -> None:
        assert episode_lookup_keys("The Rock") == ["the rock", "rock"]
        assert episode_lookup_keys("Hot Ones: Jane Doe | Finale") == [
            "hot ones: jane doe | finale",
            "jane doe",
        ]


class TestSearchUrl:
    def test_clean_episode_title(self) -> None:
        assert clean_episode_title("Hot Ones: Guest One | Bonus") == "Guest One"
        assert clean_episode_title("Guest One – Part 2") == "Guest One"
        assert clean_episode_title("Guest One - Part 2") == "Guest One"
        assert clean_episode_title("Guest One") == "Guest One"

    def test_search_url_with_season_and_episode(self) -> None:
        url = build_search_url("Guest One", 1, 1)
        assert url == (
            "https://www.youtube.com/results?search_query="
            "%22Guest%20One%22%20Hot%20Ones%20season%201%20episode%201%20spicy%20wings"
        )

    def test_search_url_skips_unknown_numbers(self) -> None:
        url = build_search_url("Guest One", 0, 3)
        assert "season" not in url
        assert url.endswith("%22Guest%20One%22%20Hot%20Ones%20spicy%20wings")

    def test_search_url_encodes_like_uri_component(self) -> None:
        url = build_search_url("Guest's Night & Day", 2, 4)
        assert "Guest's%20Night%20%26%20Day" in url
