# catalog_migration/main.py
import logging
from typing import Optional
import httpx
from rich.console import Console
from . import config
from .delegates import FileManagerDelegate, WooCommerceDelegate, DownloaderDelegate
from .pipeline import (
    step_fetch_samples, step_migrate_categories, step_migrate_products,
    analyze_samples, render_report,
)

logger = logging.getLogger(__name__)

MODES = ("test", "full", "categories-only", "fetch-samples", "analyze")


def _woocommerce(transport: Optional[httpx.AsyncBaseTransport] = None) -> WooCommerceDelegate:
    if not config.WC_CONSUMER_KEY or not config.WC_CONSUMER_SECRET:
        logger.warning("WC_CONSUMER_KEY / WC_CONSUMER_SECRET are not set. API calls will likely be rejected.")
    return WooCommerceDelegate(
        base_url=config.WC_URL,
        api_path=config.WC_API_PATH,
        consumer_key=config.WC_CONSUMER_KEY,
        consumer_secret=config.WC_CONSUMER_SECRET,
        user_agent=config.USER_AGENT,
        timeout=config.REQUEST_TIMEOUT,
        transport=transport,
    )


async def main(mode: str, console: Optional[Console] = None,
               api_transport: Optional[httpx.AsyncBaseTransport] = None,
               image_transport: Optional[httpx.AsyncBaseTransport] = None):
    """Runs one migration mode. Categories always go before products.

    The transports are only passed by tests; real runs use httpx defaults.
    """
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}. Expected one of {MODES}.")

    file_manager = FileManagerDelegate(base_path=config.DATA_PATH)

    if mode == "analyze":
        stats = analyze_samples(file_manager.iter_samples())
        if stats.total == 0:
            logger.error("No samples found in %s. Run with --fetch-samples first.", file_manager.samples_path)
            return
        render_report(stats, console or Console())
        return

    async with _woocommerce(api_transport) as wc:
        if mode == "fetch-samples":
            await step_fetch_samples(wc, file_manager)
            return

        category_map = await step_migrate_categories(wc, file_manager)
        if mode == "categories-only":
            logger.info("Product migration skipped (--categories-only).")
            return

        limit = config.TEST_LIMIT if mode == "test" else None
        async with DownloaderDelegate(user_agent=config.USER_AGENT, timeout=config.IMAGE_TIMEOUT,
                                      transport=image_transport) as downloader:
            await step_migrate_products(wc, downloader, file_manager, category_map, limit=limit)

    logger.info("Migration process finished.")
