import logging
from datetime import UTC, datetime

import pytest

from sharpline.services.odds_normalizer import parse_market_snapshot


def _event(**overrides):
    event = {
        "id": "evt-1",
        "sport_key": "tennis_atp",
        "home_team": "Player One",
        "away_team": "Player Two",
        "commence_time": "2026-05-01T15:00:00Z",
        "bookmakers": [
            {
                "key": "pinnacle",
                "title": "Pinnacle",
                "markets": [
                    {"key": "h2h", "outcomes": [{"name": "Player One", "price": 1.8}, {"name": "Player Two", "price": "2.1"}]},
                    {"key": "totals", "outcomes": [{"name": "Over", "price": 1.9, "point": 22.5}]},
                ],
            },
            {"key": "unibet_eu", "title": "Unibet", "markets": [{"key": "spreads", "outcomes": []}]},
            {
                "key": "marathonbet",
                "title": "",
                "markets": [{"key": "h2h", "outcomes": [{"name": "Player One", "price": "n/a"}, {"name": "", "price": 2.0}]}],
            },
        ],
    }
    event.update(overrides)
    return event


def test_parse_market_snapshot_keeps_only_h2h_quotes():
    snapshot = parse_market_snapshot(_event())

    assert snapshot is not None
    assert snapshot.event_id == "evt-1"
    assert snapshot.commence_time == datetime(2026, 5, 1, 15, 0, tzinfo=UTC)
    assert [q.key for q in snapshot.quotes] == ["pinnacle", "marathonbet"]

    pinnacle = snapshot.quotes[0]
    assert pinnacle.names() == ["Player One", "Player Two"]
    assert pinnacle.prices() == [1.8, 2.1]


def test_parse_market_snapshot_marks_malformed_outcomes_missing():
    marathon = parse_market_snapshot(_event()).quotes[1]
    assert marathon.label == "marathonbet"
    assert marathon.names() == ["Player One"]
    assert marathon.prices() == [2.0]
    assert marathon.outcomes[0].price is None
    assert not marathon.is_complete()


@pytest.mark.parametrize("missing", ["id", "home_team", "away_team", "commence_time"])
def test_parse_market_snapshot_drops_incomplete_events(missing):
    event = _event()
    event.pop(missing)
    assert parse_market_snapshot(event) is None


def test_parse_market_snapshot_bad_commence_time_logs_warning(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING):
        assert parse_market_snapshot(_event(commence_time="tomorrow")) is None
    assert "unparseable commence_time" in caplog.text
