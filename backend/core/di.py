import httpx
import structlog
from injector import Injector, singleton
from structlog.stdlib import BoundLogger

from domain.interfaces import (
    IAggregationService,
    IMetadataService,
    IMovieListingService,
    ISubtitleService,
)
from services.aggregation_service import MovieAggregationService
from services.imdb_service import IMDbApiService
from services.subsource_service import SubsourceApiService
from services.yts_service import YTSApiService

from .settings import Settings


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    # The year range listing fans out one request per page; the pool must hold them all at once
    pool_size = max(settings.year_range_max_pages, 10)
    return httpx.AsyncClient(
        timeout=settings.upstream_timeout,
        limits=httpx.Limits(max_connections=pool_size, max_keepalive_connections=pool_size),
        follow_redirects=True,
    )


def create_injector(settings: Settings) -> Injector:
    injector = Injector()
    injector.binder.bind(Settings, to=settings, scope=singleton)
    injector.binder.bind(
        httpx.AsyncClient, to=create_http_client(settings), scope=singleton
    )
    injector.binder.bind(IMovieListingService, to=YTSApiService, scope=singleton)
    injector.binder.bind(IMetadataService, to=IMDbApiService, scope=singleton)
    injector.binder.bind(ISubtitleService, to=SubsourceApiService, scope=singleton)
    injector.binder.bind(
        IAggregationService, to=MovieAggregationService, scope=singleton
    )
    injector.binder.bind(
        BoundLogger, to=structlog.get_logger("ytsportal"), scope=singleton
    )
    return injector
