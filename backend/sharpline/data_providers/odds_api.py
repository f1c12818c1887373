from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import httpx

from sharpline.config import settings
from sharpline.models.pick import H2H_MARKET

logger = logging.getLogger(__name__)


class OddsAPIError(Exception):
    """Raised when the odds provider cannot be reached or answers with a non-success status."""

    def __init__(self, path: str, message: str, status_code: int | None = None) -> None:
        self.path = path
        self.status_code = status_code
        if status_code is None:
            super().__init__(f"ODDS_API {path}: {message}")
        else:
            super().__init__(f"ODDS_API {path} {status_code}: {message}")


@dataclass
class OddsAPIResult:
    data: list[dict[str, Any]]
    requests_remaining: int | None


def isoformat_no_ms(value: datetime) -> str:
    return value.astimezone(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class OddsAPIClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.odds_api_base_url).rstrip("/")
        self.api_key = settings.odds_api_key if api_key is None else api_key
        self.timeout = timeout or settings.odds_api_timeout_seconds
        self.transport = transport
        self.requests_remaining: int | None = None

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> OddsAPIResult:
        if not self.api_key:
            raise OddsAPIError(path, "ODDS_API_KEY is not configured")
        params = {k: v for k, v in (params or {}).items() if v is not None and f"{v}" != ""}
        params["apiKey"] = self.api_key
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params=params, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            raise OddsAPIError(path, str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            raise OddsAPIError(path, response.text or "<no-body>", status_code=response.status_code)

        remaining = response.headers.get("x-requests-remaining")
        self.requests_remaining = int(remaining) if remaining and remaining.isdigit() else self.requests_remaining
        logger.debug("odds api request ok: path=%s requests_remaining=%s", path, self.requests_remaining)
        data = response.json()
        if isinstance(data, list):
            return OddsAPIResult(data=data, requests_remaining=self.requests_remaining)
        return OddsAPIResult(data=[data], requests_remaining=self.requests_remaining)

    async def get_sports(self) -> OddsAPIResult:
        return await self._get("sports", params={"all": "true"})

    async def list_tracked_sports(self, prefixes: Iterable[str]) -> list[str]:
        """Distinct sport keys starting with one of ``prefixes``, in provider order."""
        prefixes = tuple(prefixes)
        result = await self.get_sports()
        keys: list[str] = []
        for item in result.data:
            key = item.get("key")
            if key and key.startswith(prefixes) and key not in keys:
                keys.append(key)
        return keys

    async def get_odds(
        self,
        sport: str,
        regions: str = "eu",
        commence_from: datetime | None = None,
        commence_to: datetime | None = None,
        markets: str = H2H_MARKET,
    ) -> OddsAPIResult:
        params: dict[str, Any] = {
            "regions": regions,
            "markets": markets,
            "oddsFormat": "decimal",
            "dateFormat": "iso",
            "commenceTimeFrom": isoformat_no_ms(commence_from) if commence_from else None,
            "commenceTimeTo": isoformat_no_ms(commence_to) if commence_to else None,
        }
        return await self._get(f"sports/{sport}/odds", params=params)

    async def get_scores(self, sport: str, event_ids: Sequence[str], days_from: int = 3) -> OddsAPIResult:
        params = {"dateFormat": "iso", "eventIds": ",".join(event_ids), "daysFrom": str(days_from)}
        return await self._get(f"sports/{sport}/scores", params=params)
