# catalog_migration/delegates/woocommerce_delegate.py
import logging
import httpx
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

Params = Dict[str, Union[str, int]]


class WooCommerceAPIError(Exception):
    """Raised when the WooCommerce REST API can't be reached or answers with an error."""
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WooCommerceDelegate:
    """Talks to the WooCommerce v3 REST API of the store being migrated."""
    def __init__(self, base_url: str, api_path: str, consumer_key: str, consumer_secret: str,
                 user_agent: str, timeout: float = 30, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_url = base_url.rstrip("/") + api_path
        self.auth = httpx.BasicAuth(consumer_key, consumer_secret)
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None # Will be initialized in __aenter__

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            auth=self.auth,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
            transport=self.transport,
        )
        logger.debug("WooCommerceDelegate client initialized for %s", self.api_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            logger.debug("WooCommerceDelegate client closed.")

    async def _request(self, method: str, endpoint: str, params: Optional[Params] = None) -> httpx.Response:
        if not self.client:
            raise WooCommerceAPIError("HTTP client not initialized. Use 'async with WooCommerceDelegate(...)'.")
        try:
            logger.debug("%s %s params=%s", method, endpoint, params)
            response = await self.client.request(method, endpoint, params=params, follow_redirects=True)
        except httpx.RequestError as e:
            raise WooCommerceAPIError(f"Network error calling {endpoint}: {e}") from e

        if response.is_error:
            raise WooCommerceAPIError(
                f"WC API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return response

    async def fetch(self, endpoint: str, params: Optional[Params] = None) -> Any:
        """GETs an endpoint (e.g. 'products/categories') and returns the decoded JSON."""
        response = await self._request("GET", endpoint, params)
        return response.json()

    async def get_total_pages(self, endpoint: str, per_page: int = 100) -> int:
        """Reads the page count WooCommerce reports in the x-wp-totalpages header."""
        response = await self._request("HEAD", endpoint, {"per_page": per_page})
        total_pages = response.headers.get("x-wp-totalpages", "1")
        try:
            return int(total_pages)
        except ValueError:
            logger.warning("Unexpected x-wp-totalpages header for %s: %r. Assuming 1 page.", endpoint, total_pages)
            return 1

    async def fetch_all(self, endpoint: str, params: Optional[Params] = None, per_page: int = 100) -> List[Dict]:
        """Walks pages from 1 until WooCommerce returns an empty one."""
        results: List[Dict] = []
        page = 1
        while True:
            logger.info("Fetching %s page %d...", endpoint, page)
            page_params: Params = dict(params or {})
            page_params.update({"per_page": per_page, "page": page})
            items = await self.fetch(endpoint, page_params)
            if not items:
                break
            results.extend(items)
            page += 1
        logger.debug("Fetched %d items from %s", len(results), endpoint)
        return results
