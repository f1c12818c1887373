from __future__ import annotations

from dataclasses import dataclass

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine.url import URL, make_url

DEFAULT_SHARP_BOOKS = "pinnacle,betfair,betfairex,betfair_ex,sbo,sbobet,matchbook,circa"


class Settings(BaseSettings):
    app_name: str = "SharpLine"
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/sharpline"
    debug: bool = False

    odds_api_key: str = ""
    odds_api_base_url: str = "https://api.the-odds-api.com/v4"
    odds_api_timeout_seconds: float = 20.0

    region: str = "eu"
    sports: str = "tennis,soccer"
    scan_hours: int = 4
    ev_min: float = 0.03
    sharp_books: str = DEFAULT_SHARP_BOOKS

    settlement_lookahead_hours: int = 6
    settlement_batch_size: int = 25
    settlement_max_events: int = 200
    scores_days_from: int = 3

    scan_interval_minutes: int = 30
    settlement_interval_minutes: int = 30

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


settings = Settings()


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class ScanConfig:
    hours: int = 4
    ev_min: float = 0.03
    region: str = "eu"
    sharp_books: tuple[str, ...] = _split_csv(DEFAULT_SHARP_BOOKS)
    sport_prefixes: tuple[str, ...] = ("tennis_", "soccer_")

    @classmethod
    def from_settings(cls, source: Settings | None = None, **overrides) -> ScanConfig:
        source = source or settings
        values = {
            "hours": source.scan_hours,
            "ev_min": source.ev_min,
            "region": source.region,
            "sharp_books": _split_csv(source.sharp_books),
            "sport_prefixes": tuple(f"{group}_" for group in _split_csv(source.sports)),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True, slots=True)
class SettlementConfig:
    lookahead_hours: int = 6
    batch_size: int = 25
    max_events: int = 200
    days_from: int = 3

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> SettlementConfig:
        source = source or settings
        return cls(
            lookahead_hours=source.settlement_lookahead_hours,
            batch_size=source.settlement_batch_size,
            max_events=source.settlement_max_events,
            days_from=source.scores_days_from,
        )


def get_database_url() -> str:
    return settings.database_url


def get_database_identity() -> tuple[str, str]:
    parsed: URL = make_url(get_database_url())
    return parsed.host or "<unknown>", parsed.database or "<unknown>"
