from __future__ import annotations

import unittest
from datetime import datetime, timezone

from benolo.ingestion.match_sync import (
    build_upsert_payload,
    coerce_score,
    has_match_changed,
    map_provider_status,
    normalize_fixture,
    normalize_iso_string,
)
from benolo.ingestion.schema import MatchStatus, ProviderFixture
from benolo.timeutils import parse_iso_datetime

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)
PAST = "2025-03-10T10:00:00Z"
FUTURE = "2025-03-12T18:30:00Z"


class CoerceScoreTests(unittest.TestCase):
    def test_numbers_and_numeric_strings(self) -> None:
        self.assertEqual(2, coerce_score(2))
        self.assertEqual(3, coerce_score("3"))
        self.assertEqual(1, coerce_score(1.0))
        self.assertEqual(1.5, coerce_score("1.5"))

    def test_degenerate_values_become_none(self) -> None:
        for value in (None, "", "  ", "abc", True, float("inf"), [], {}):
            with self.subTest(value=value):
                self.assertIsNone(coerce_score(value))


class NormalizeIsoStringTests(unittest.TestCase):
    def test_formats_with_milliseconds_and_z(self) -> None:
        self.assertEqual("2025-03-10T10:00:00.000Z", normalize_iso_string("2025-03-10T10:00:00Z"))

    def test_offsets_are_converted_to_utc(self) -> None:
        self.assertEqual(
            "2025-03-10T09:00:00.000Z",
            normalize_iso_string("2025-03-10T11:00:00+02:00"),
        )

    def test_rfc_2822_timestamps_are_parsed(self) -> None:
        self.assertEqual(
            "2025-03-12T18:30:00.000Z",
            normalize_iso_string("Wed, 12 Mar 2025 18:30:00 GMT", NOW),
        )
        self.assertEqual(
            "2025-03-12T17:30:00.000Z",
            normalize_iso_string("Wed, 12 Mar 2025 18:30:00 +0100", NOW),
        )

    def test_unparseable_falls_back_to_reference(self) -> None:
        self.assertEqual("2025-03-10T12:00:00.000Z", normalize_iso_string("soon", NOW))
        self.assertEqual("2025-03-10T12:00:00.000Z", normalize_iso_string(None, NOW))


class MapProviderStatusTests(unittest.TestCase):
    def test_not_started_future_is_upcoming(self) -> None:
        self.assertEqual(MatchStatus.UPCOMING, map_provider_status("NS", FUTURE, None, None, NOW))

    def test_no_label_past_kickoff_is_live(self) -> None:
        self.assertEqual(MatchStatus.LIVE, map_provider_status(None, PAST, None, None, NOW))

    def test_full_time_is_completed(self) -> None:
        self.assertEqual(MatchStatus.COMPLETED, map_provider_status("FT", PAST, 2, 1, NOW))

    def test_score_alone_implies_completion(self) -> None:
        self.assertEqual(MatchStatus.COMPLETED, map_provider_status(None, PAST, 1, 0, NOW))

    def test_completed_marker_wins_even_before_kickoff(self) -> None:
        self.assertEqual(MatchStatus.COMPLETED, map_provider_status(" Finished ", FUTURE, None, None, NOW))

    def test_score_with_live_marker_is_completed(self) -> None:
        self.assertEqual(MatchStatus.COMPLETED, map_provider_status("2H", PAST, 1, 1, NOW))

    def test_score_with_upcoming_marker_stays_upcoming(self) -> None:
        self.assertEqual(MatchStatus.UPCOMING, map_provider_status("POSTPONED", PAST, 0, 0, NOW))

    def test_live_marker(self) -> None:
        self.assertEqual(MatchStatus.LIVE, map_provider_status("IN_PLAY", FUTURE, None, 1, NOW))

    def test_unknown_label_after_kickoff_is_live(self) -> None:
        self.assertEqual(MatchStatus.LIVE, map_provider_status("weird", PAST, None, None, NOW))

    def test_upcoming_label_after_kickoff_stays_upcoming(self) -> None:
        self.assertEqual(MatchStatus.UPCOMING, map_provider_status("scheduled", PAST, None, None, NOW))

    def test_empty_input_defaults_to_upcoming(self) -> None:
        self.assertEqual(MatchStatus.UPCOMING, map_provider_status(None, None, None, None, NOW))
        self.assertEqual(MatchStatus.UPCOMING, map_provider_status("", "garbage", None, None, NOW))


class NormalizeFixtureTests(unittest.TestCase):
    def test_normalizes_scores_status_and_start(self) -> None:
        fixture = ProviderFixture(
            id="m-1",
            home_team="Arsenal",
            away_team="Chelsea",
            start_time="2025-03-10T10:00:00Z",
            status="FT",
            home_score="2",
            away_score=1,
            metadata={"homeCrest": "https://crest/h.png"},
        )

        normalized = normalize_fixture(fixture, NOW)

        self.assertEqual("m-1", normalized.external_ref)
        self.assertEqual("2025-03-10T10:00:00.000Z", normalized.start_at)
        self.assertEqual(MatchStatus.COMPLETED, normalized.status)
        self.assertEqual(2, normalized.home_score)
        self.assertEqual(1, normalized.away_score)
        self.assertEqual("FT", normalized.raw_status)
        self.assertEqual({"homeCrest": "https://crest/h.png"}, normalized.provider_meta)

    def test_malformed_fixture_degrades_to_defaults(self) -> None:
        fixture = ProviderFixture(
            id="m-2",
            home_team="A",
            away_team="B",
            start_time="not-a-date",
            home_score="x",
            away_score=None,
        )

        normalized = normalize_fixture(fixture, NOW)

        self.assertEqual("2025-03-10T12:00:00.000Z", normalized.start_at)
        self.assertIsNone(normalized.home_score)
        self.assertIsNone(normalized.away_score)
        self.assertEqual(MatchStatus.LIVE, normalized.status)

    def test_non_iso_start_time_keeps_real_kickoff(self) -> None:
        fixture = ProviderFixture(
            id="m-4",
            home_team="A",
            away_team="B",
            start_time="Wed, 12 Mar 2025 18:30:00 GMT",
            status="NS",
        )

        normalized = normalize_fixture(fixture, NOW)

        self.assertEqual("2025-03-12T18:30:00.000Z", normalized.start_at)
        self.assertEqual(MatchStatus.UPCOMING, normalized.status)

    def test_start_at_is_stable_when_fed_back(self) -> None:
        fixture = ProviderFixture(id="m-3", home_team="A", away_team="B", start_time="2025-03-12T20:45:00+01:00")

        normalized = normalize_fixture(fixture, NOW)
        again = normalize_iso_string(normalized.start_at, NOW)

        self.assertEqual(normalized.start_at, again)
        self.assertEqual(
            parse_iso_datetime("2025-03-12T19:45:00Z"),
            parse_iso_datetime(normalized.start_at),
        )


class HasMatchChangedTests(unittest.TestCase):
    def _normalized(self, **overrides):
        fields = {
            "id": "m-1",
            "home_team": "A",
            "away_team": "B",
            "start_time": FUTURE,
            "status": "NS",
            "metadata": {"homeCrest": "h.png", "awayCrest": "a.png", "venue": "Old"},
        }
        fields.update(overrides)
        return normalize_fixture(ProviderFixture(**fields), NOW)

    def test_missing_snapshot_is_a_change(self) -> None:
        self.assertTrue(has_match_changed(None, self._normalized(), NOW))

    def test_cosmetic_status_label_difference_is_not_a_change(self) -> None:
        existing = {
            "start_at": "2025-03-12T18:30:00+00:00",
            "status": "upcoming",
            "home_score": None,
            "away_score": None,
            "metadata": {"provider_status": "scheduled", "homeCrest": "h.png", "awayCrest": "a.png"},
        }

        self.assertFalse(has_match_changed(existing, self._normalized(status="NS"), NOW))

    def test_missing_stored_status_defaults_to_upcoming(self) -> None:
        existing = {
            "start_at": datetime(2025, 3, 12, 18, 30, tzinfo=timezone.utc),
            "status": None,
            "metadata": {"homeCrest": "h.png", "awayCrest": "a.png"},
        }

        self.assertFalse(has_match_changed(existing, self._normalized(), NOW))

    def test_degenerate_snapshot_does_not_raise(self) -> None:
        cases = [
            {"start_at": 12345, "status": 1, "home_score": "abc", "metadata": "x"},
            {"start_at": ["bad"], "status": None},
            "not a row",
        ]
        for existing in cases:
            with self.subTest(existing=existing):
                self.assertTrue(has_match_changed(existing, self._normalized(), NOW))

    def test_degenerate_snapshot_values_are_compared_raw(self) -> None:
        existing = {
            "start_at": FUTURE,
            "status": "upcoming",
            "home_score": {"goals": 1},
            "metadata": {"homeCrest": "h.png", "awayCrest": "a.png"},
        }

        self.assertTrue(has_match_changed(existing, self._normalized(), NOW))

    def test_score_difference_is_a_change(self) -> None:
        existing = {"start_at": PAST, "status": "live", "home_score": 1, "away_score": 0}
        normalized = self._normalized(start_time=PAST, status="LIVE", home_score=1, away_score=1, metadata=None)

        self.assertTrue(has_match_changed(existing, normalized, NOW))

    def test_crest_difference_is_a_change(self) -> None:
        existing = {"start_at": FUTURE, "status": "upcoming", "metadata": {"homeCrest": "h.png"}}

        self.assertTrue(has_match_changed(existing, self._normalized(), NOW))

    def test_other_metadata_keys_are_ignored(self) -> None:
        existing = {
            "start_at": FUTURE,
            "status": "upcoming",
            "metadata": {"homeCrest": "h.png", "awayCrest": "a.png", "venue": "New"},
        }

        self.assertFalse(has_match_changed(existing, self._normalized(), NOW))


class BuildUpsertPayloadTests(unittest.TestCase):
    def test_metadata_always_carries_provider_and_raw_status(self) -> None:
        fixture = ProviderFixture(id="m-9", home_team="A", away_team="B", start_time=FUTURE)

        payload = build_upsert_payload("league-1", normalize_fixture(fixture, NOW), "mock")

        self.assertEqual({"provider": "mock", "provider_status": None}, payload.metadata)
        self.assertEqual("league-1", payload.league_id)
        self.assertEqual("m-9", payload.external_ref)

    def test_final_whistle_update_end_to_end(self) -> None:
        existing = {
            "start_at": "2025-03-10T10:00:00Z",
            "status": "live",
            "home_score": 1,
            "away_score": 0,
        }
        fixture = ProviderFixture(
            id="m-1",
            home_team="Arsenal",
            away_team="Chelsea",
            start_time="2025-03-10T10:00:00Z",
            status="FT",
            home_score=2,
            away_score=0,
        )
        normalized = normalize_fixture(fixture, NOW)

        self.assertTrue(has_match_changed(existing, normalized, NOW))

        payload = build_upsert_payload("league-1", normalized, "football-data")

        self.assertEqual(MatchStatus.COMPLETED, payload.status)
        self.assertEqual(2, payload.home_score)
        self.assertEqual(0, payload.away_score)
        self.assertEqual("football-data", payload.metadata["provider"])
        self.assertEqual("FT", payload.metadata["provider_status"])


if __name__ == "__main__":
    unittest.main()
