from fastapi_injector import Injected
from structlog.stdlib import BoundLogger

from core.settings import Settings
from domain.interfaces import (
    IAggregationService,
    IMetadataService,
    IMovieListingService,
    ISubtitleService,
)
from managers.movie_manager import MovieManager


def get_movie_manager(
    listing: IMovieListingService = Injected(IMovieListingService),
    metadata: IMetadataService = Injected(IMetadataService),
    subtitles: ISubtitleService = Injected(ISubtitleService),
    aggregator: IAggregationService = Injected(IAggregationService),
    settings: Settings = Injected(Settings),
    logger: BoundLogger = Injected(BoundLogger),
) -> MovieManager:
    return MovieManager(
        listing=listing,
        metadata=metadata,
        subtitles=subtitles,
        aggregator=aggregator,
        settings=settings,
        logger=logger,
    )


def get_logger(logger: BoundLogger = Injected(BoundLogger)) -> BoundLogger:
    return logger
