"""Background task scheduler for periodic NAV refreshes."""

import logging
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.services.nav_source import nav_source
from app.services.fund_catalog import fund_catalog_service
from app.models.database import async_session_factory
from app.config import NAV_DATA_FILE, NAV_FEED_URL, NAV_REFRESH_INTERVAL

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def sync_fund_catalog():
    """Make sure every fund the NAV source prices exists in the catalog."""
    async with async_session_factory() as session:
        await fund_catalog_service.sync_from_nav_source(session, nav_source)


async def refresh_nav_data():
    """Reload the NAV table from the configured file or feed, then sync the catalog."""
    if not (NAV_DATA_FILE or NAV_FEED_URL):
        return

    try:
        if nav_source.reload(data_file=NAV_DATA_FILE, feed_url=NAV_FEED_URL):
            await sync_fund_catalog()
    except Exception as e:
        logger.error(f"Failed to refresh NAV data: {e}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        refresh_nav_data,
        trigger=IntervalTrigger(seconds=NAV_REFRESH_INTERVAL),
        id="refresh_nav_data",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started, refreshing NAV every {NAV_REFRESH_INTERVAL}s")


def stop_scheduler():
    """Stop the background scheduler."""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")
