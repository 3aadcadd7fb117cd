from typing import Any, Callable, Dict, List, Optional
from unittest.mock import MagicMock

import httpx
import pytest
from structlog.stdlib import BoundLogger

from core.settings import Settings
from managers.movie_manager import MovieManager
from services.aggregation_service import MovieAggregationService
from services.imdb_service import IMDbApiService
from services.subsource_service import SubsourceApiService
from services.yts_service import YTSApiService

YTS_URL = "https://yts.test/api/v2"
IMDB_URL = "https://imdb.test"
SUBSOURCE_URL = "https://subsource.test/api/v1"


def listing_payload(movies: Optional[List[Dict[str, Any]]], movie_count: int = 1000) -> Dict[str, Any]:
    data: Dict[str, Any] = {"movie_count": movie_count, "limit": 50, "page_number": 1}
    if movies is not None:
        data["movies"] = movies
    return {"status": "ok", "status_message": "Query was successful", "data": data}


def movie(movie_id, year=None, title=None) -> Dict[str, Any]:
    item = {"id": movie_id, "title": title or f"Movie {movie_id}", "rating": 7.1}
    if year is not None:
        item["year"] = year
    return item


class FakeUpstream:
    """Routes requests by path to handlers and records every request made."""

    def __init__(self):
        self.routes: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def on(self, path: str, handler: Callable[[httpx.Request], httpx.Response]):
        self.routes[path] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"status": "error"})
        return handler(request)

    def requests_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def mock_logger() -> BoundLogger:
    """Create a mock logger for testing."""
    logger = MagicMock(spec=BoundLogger)
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.exception = MagicMock()
    return logger


@pytest.fixture
def settings() -> Settings:
    return Settings(
        YTS_API_URL=YTS_URL,
        IMDB_API_URL=IMDB_URL,
        SUBSOURCE_API_URL=SUBSOURCE_URL,
        SUBSOURCE_API_KEY="test-key",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def yts_service(settings, http_client, mock_logger) -> YTSApiService:
    return YTSApiService(settings=settings, client=http_client, logger=mock_logger)


@pytest.fixture
def imdb_service(settings, http_client, mock_logger) -> IMDbApiService:
    return IMDbApiService(settings=settings, client=http_client, logger=mock_logger)


@pytest.fixture
def subsource_service(settings, http_client, mock_logger) -> SubsourceApiService:
    return SubsourceApiService(settings=settings, client=http_client, logger=mock_logger)


@pytest.fixture
def aggregation_service(settings, mock_logger) -> MovieAggregationService:
    return MovieAggregationService(settings=settings, logger=mock_logger)


@pytest.fixture
def movie_manager(
    yts_service, imdb_service, subsource_service, aggregation_service, settings, mock_logger
) -> MovieManager:
    """Create a movie manager wired to the fake upstream."""
    return MovieManager(
        listing=yts_service,
        metadata=imdb_service,
        subtitles=subsource_service,
        aggregator=aggregation_service,
        settings=settings,
        logger=mock_logger,
    )


@pytest.fixture
def sample_imdb_title() -> Dict[str, Any]:
    return {
        "id": "tt0133093",
        "primaryTitle": "The Matrix",
        "plot": "A computer hacker learns about the true nature of his reality.",
        "directors": [
            {"id": "nm0905154", "displayName": "Lana Wachowski", "primaryImage": {"url": "https://img.test/lana.jpg"}},
            {"id": "nm0905152", "displayName": "Lilly Wachowski"},
        ],
        "stars": [
            {"id": "nm0000206", "displayName": "Keanu Reeves", "primaryImage": {"url": "https://img.test/keanu.jpg"}},
            {"id": "nm0000401", "displayName": "Laurence Fishburne", "primaryImage": None},
        ],
    }
