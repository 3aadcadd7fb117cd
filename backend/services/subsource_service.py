from typing import Any, Dict

import httpx
from injector import inject
from structlog.stdlib import BoundLogger

from core.settings import Settings
from domain.entities import SubtitleArchive
from domain.exceptions import UpstreamError
from domain.interfaces import ISubtitleService
from utils.upstream import get_json, get_response


class SubsourceApiService(ISubtitleService):
    @inject
    def __init__(self, settings: Settings, client: httpx.AsyncClient, logger: BoundLogger):
        self.base_url = settings.subsource_api_url.rstrip("/")
        self.headers = {"X-API-Key": settings.subsource_api_key}
        self.client = client
        self.logger = logger

    async def search_subtitles(self, imdb_id: str) -> Dict[str, Any]:
        """
        Resolve the IMDb id to a Subsource movie and list its subtitles.

        Returns ``{"data": []}`` when Subsource does not know the title.
        """
        search_url = f"{self.base_url}/movies/search"
        self.logger.info("Searching Subsource movie", imdb_id=imdb_id)
        search = await get_json(
            self.client,
            search_url,
            params={"imdb": imdb_id, "searchType": "imdb"},
            headers=self.headers,
        )
        results = search.get("data") if isinstance(search, dict) else None
        if not results:
            self.logger.info("No Subsource movie found", imdb_id=imdb_id)
            return {"data": []}

        if not isinstance(results, list) or not isinstance(results[0], dict):
            raise UpstreamError(search_url, "unexpected payload")

        movie_id = results[0].get("movieId")
        self.logger.info("Fetching subtitles", imdb_id=imdb_id, subsource_movie_id=movie_id)
        return await get_json(
            self.client,
            f"{self.base_url}/subtitles",
            params={"movieId": movie_id},
            headers=self.headers,
        )

    async def download_subtitle(self, subtitle_id: str) -> SubtitleArchive:
        self.logger.info("Downloading subtitle", subtitle_id=subtitle_id)
        response = await get_response(
            self.client, f"{self.base_url}/subtitles/{subtitle_id}/download", headers=self.headers
        )
        return SubtitleArchive(
            content=response.content,
            content_type=response.headers.get("content-type"),
            content_disposition=response.headers.get("content-disposition"),
        )
