from typing import Any, Dict

import httpx
from injector import inject
from structlog.stdlib import BoundLogger

from core.settings import Settings
from domain.interfaces import IMetadataService
from utils.upstream import get_json


class IMDbApiService(IMetadataService):
    @inject
    def __init__(self, settings: Settings, client: httpx.AsyncClient, logger: BoundLogger):
        self.base_url = settings.imdb_api_url.rstrip("/")
        self.client = client
        self.logger = logger

    async def get_title(self, imdb_code: str) -> Dict[str, Any]:
        self.logger.info("Fetching IMDb title", imdb_code=imdb_code)
        return await get_json(self.client, f"{self.base_url}/titles/{imdb_code}")
