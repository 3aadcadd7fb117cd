import asyncio
from typing import Any, Dict, List, Optional

import httpx
from injector import inject
from structlog.stdlib import BoundLogger

from core.settings import Settings
from domain.entities import ListingPage
from domain.exceptions import UpstreamError
from domain.interfaces import IMovieListingService
from utils.upstream import get_json


class YTSApiService(IMovieListingService):
    @inject
    def __init__(self, settings: Settings, client: httpx.AsyncClient, logger: BoundLogger):
        self.base_url = settings.yts_api_url.rstrip("/")
        self.client = client
        self.logger = logger

    async def list_movies(self, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/list_movies.json"
        self.logger.info("YTS API request", url=url, params=params)
        data = await get_json(self.client, url, params=params)
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            self.logger.info(
                "YTS API response",
                status=data.get("status"),
                movie_count=data["data"].get("movie_count") or 0,
            )
        return data

    async def fetch_pages(self, params: Dict[str, Any], page_count: int, limit: int) -> List[ListingPage]:
        """
        Fetch pages 1..page_count of the listing concurrently.

        Every page is fetched independently: a failed or malformed page comes
        back with an empty payload and never affects its siblings. Results are
        returned in page order regardless of completion order.
        """
        self.logger.info("Fetching listing pages", page_count=page_count, limit=limit, params=params)
        tasks = [self._fetch_page(params, page, limit) for page in range(1, page_count + 1)]
        pages = await asyncio.gather(*tasks)

        failed = [p.page for p in pages if p.payload is None]
        self.logger.info(
            "Listing pages fetched",
            succeeded=len(pages) - len(failed),
            failed_pages=failed,
            upstream_movie_count=self._first_movie_count(pages),
        )
        return pages

    async def _fetch_page(self, params: Dict[str, Any], page: int, limit: int) -> ListingPage:
        page_params = {**params, "limit": limit, "page": page}
        try:
            payload = await get_json(self.client, f"{self.base_url}/list_movies.json", params=page_params)
        except UpstreamError as e:
            self.logger.error("Error fetching page", page=page, error=e.reason)
            return ListingPage(page=page, payload=None)
        if not isinstance(payload, dict):
            self.logger.error("Error fetching page", page=page, error="unexpected payload")
            return ListingPage(page=page, payload=None)
        return ListingPage(page=page, payload=payload)

    def _first_movie_count(self, pages: List[ListingPage]) -> Optional[int]:
        # Catalog-wide total as reported upstream; informational only
        for listing_page in pages:
            data = (listing_page.payload or {}).get("data")
            if isinstance(data, dict) and data.get("movie_count"):
                return data["movie_count"]
        return None

    async def movie_details(self, movie_id: str) -> Dict[str, Any]:
        url = f"{self.base_url}/movie_details.json"
        params = {"movie_id": movie_id, "with_images": "true", "with_cast": "true"}
        self.logger.info("Fetching movie details", movie_id=movie_id)
        return await get_json(self.client, url, params=params)

    async def movie_suggestions(self, movie_id: str) -> Dict[str, Any]:
        url = f"{self.base_url}/movie_suggestions.json"
        self.logger.info("Fetching movie suggestions", movie_id=movie_id)
        return await get_json(self.client, url, params={"movie_id": movie_id})
