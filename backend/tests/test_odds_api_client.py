import asyncio
from datetime import UTC, datetime, timedelta

import httpx
import pytest

from sharpline.data_providers.odds_api import OddsAPIClient, OddsAPIError, isoformat_no_ms


def _client(handler) -> OddsAPIClient:
    return OddsAPIClient(
        api_key="test-key-123456",
        base_url="https://odds.example/v4/",
        transport=httpx.MockTransport(handler),
    )


def test_isoformat_no_ms():
    value = datetime(2026, 5, 1, 12, 30, 15, 123456, tzinfo=UTC)
    assert isoformat_no_ms(value) == "2026-05-01T12:30:15Z"


def test_get_odds_sends_window_and_decimal_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "evt-1"}], headers={"x-requests-remaining": "42"})

    client = _client(handler)
    start = datetime(2026, 5, 1, 12, 0, tzinfo=UTC)
    result = asyncio.run(
        client.get_odds("soccer_epl", regions="eu", commence_from=start, commence_to=start + timedelta(hours=4))
    )

    assert result.data == [{"id": "evt-1"}]
    assert result.requests_remaining == 42
    request = seen[0]
    assert request.url.path == "/v4/sports/soccer_epl/odds"
    params = request.url.params
    assert params["apiKey"] == "test-key-123456"
    assert params["regions"] == "eu"
    assert params["markets"] == "h2h"
    assert params["oddsFormat"] == "decimal"
    assert params["commenceTimeFrom"] == "2026-05-01T12:00:00Z"
    assert params["commenceTimeTo"] == "2026-05-01T16:00:00Z"


def test_get_scores_joins_event_ids():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    asyncio.run(_client(handler).get_scores("tennis_atp", ["a", "b", "c"], days_from=3))

    params = seen[0].url.params
    assert seen[0].url.path == "/v4/sports/tennis_atp/scores"
    assert params["eventIds"] == "a,b,c"
    assert params["daysFrom"] == "3"


def test_list_tracked_sports_filters_prefixes_and_dedupes():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["all"] == "true"
        return httpx.Response(
            200,
            json=[
                {"key": "soccer_epl"},
                {"key": "basketball_nba"},
                {"key": "tennis_atp_french_open"},
                {"key": "soccer_epl"},
                {"title": "no key"},
            ],
        )

    sports = asyncio.run(_client(handler).list_tracked_sports(("tennis_", "soccer_")))
    assert sports == ["soccer_epl", "tennis_atp_french_open"]


def test_error_status_raises_with_status_and_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="invalid api key")

    with pytest.raises(OddsAPIError) as excinfo:
        asyncio.run(_client(handler).get_sports())

    assert excinfo.value.status_code == 401
    assert "invalid api key" in str(excinfo.value)
    assert "sports" in str(excinfo.value)


def test_transport_error_is_wrapped():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(OddsAPIError, match="connection refused"):
        asyncio.run(_client(handler).get_sports())


def test_missing_api_key_raises():
    client = OddsAPIClient(api_key="", transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])))
    with pytest.raises(OddsAPIError, match="ODDS_API_KEY"):
        asyncio.run(client.get_sports())
