# catalog_migration/delegates/downloader_delegate.py
import logging
import httpx
from typing import Optional

logger = logging.getLogger(__name__)

class DownloaderDelegate:
    """Handles downloading product images from the old store."""
    def __init__(self, user_agent: str, timeout: float = 60, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None # Will be initialized in __aenter__

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
            transport=self.transport,
        )
        logger.debug("DownloaderDelegate httpx.AsyncClient initialized.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            logger.debug("DownloaderDelegate httpx.AsyncClient closed.")

    async def download_image(self, url: str) -> Optional[bytes]:
        """Downloads an image. Returns None instead of raising so one bad image doesn't fail its product."""
        if not self.client:
            logger.error("HTTP client not initialized. Cannot download image.")
            return None

        try:
            logger.debug("Attempting to download image from: %s", url)
            response = await self.client.get(url, follow_redirects=True)
            response.raise_for_status()
            logger.debug("Downloaded %d bytes from %s", len(response.content), url)
            return response.content
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error downloading image from %s: %s", url, e)
        except httpx.RequestError as e:
            logger.error("Network error downloading image from %s: %s", url, e)
        return None
