import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy import text

from sharpline.config import get_database_identity, settings
from sharpline.data_providers.odds_api import OddsAPIError
from sharpline.database import AsyncSessionLocal, create_tables, engine
from sharpline.tasks.scan import run_scan_task
from sharpline.tasks.settle import run_settlement_task

logger = logging.getLogger(__name__)


async def wait_for_required_tables(max_attempts: int = 30, sleep_seconds: int = 2) -> None:
    for attempt in range(1, max_attempts + 1):
        try:
            async with AsyncSessionLocal() as session:
                await session.execute(text("SELECT 1 FROM picks LIMIT 1"))
            if attempt > 1:
                logger.info("database schema ready after retry: attempts=%s", attempt)
            return
        except Exception:
            if attempt == max_attempts:
                logger.exception("database schema not ready after retries")
                raise
            logger.warning(
                "database schema not ready; waiting before retry: attempt=%s/%s sleep_seconds=%s",
                attempt,
                max_attempts,
                sleep_seconds,
            )
            await asyncio.sleep(sleep_seconds)


async def run_scan_job() -> None:
    if not settings.odds_api_key:
        logger.error("ODDS_API_KEY is missing; skipping scan cycle until it is configured")
        return
    try:
        summary = await run_scan_task()
    except OddsAPIError:
        logger.exception("scan cycle failed")
        return
    logger.info("scan job complete: picks_inserted=%s", summary.picks_inserted)


async def run_settlement_job() -> None:
    if not settings.odds_api_key:
        logger.error("ODDS_API_KEY is missing; skipping settlement cycle until it is configured")
        return
    summary = await run_settlement_task()
    logger.info("settlement job complete: picks_settled=%s", summary.picks_settled)


async def main() -> None:
    db_host, db_name = get_database_identity()
    logger.info(
        "worker startup: database_host=%s database_name=%s odds_api_key_set=%s scan_interval_minutes=%s settlement_interval_minutes=%s",
        db_host,
        db_name,
        bool(settings.odds_api_key),
        settings.scan_interval_minutes,
        settings.settlement_interval_minutes,
    )

    if engine.dialect.name == "sqlite":
        await create_tables(engine)
    else:
        await wait_for_required_tables()
    await run_scan_job()

    sched = AsyncIOScheduler(timezone="UTC")
    sched.add_job(run_scan_job, "interval", minutes=settings.scan_interval_minutes, max_instances=1, coalesce=True)
    sched.add_job(
        run_settlement_job, "interval", minutes=settings.settlement_interval_minutes, max_instances=1, coalesce=True
    )
    sched.start()

    while True:
        await asyncio.sleep(3600)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    asyncio.run(main())
