from dataclasses import asdict
from typing import Any, Dict, Optional

from structlog.stdlib import BoundLogger

from core.settings import Settings
from domain.entities import ALL_YEARS, YEAR_RANGE_SENTINEL, Person
from domain.exceptions import UpstreamError
from domain.interfaces import (
    IAggregationService,
    IMetadataService,
    IMovieListingService,
    ISubtitleService,
)

DEFAULT_LIMIT = 20
DEFAULT_PAGE = 1


def parse_positive_int(value: Any, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def build_listing_params(query: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate inbound listing filters into YTS query params.

    The upstream ignores ``year`` most of the time, so a concrete year is
    appended to ``query_term``. ``all`` and the "2000 and below" sentinel are
    dropped, the latter being applied after fetching.
    """
    params = dict(query)
    title = params.get("query_term") or ""
    year = params.get("year") or ""
    is_year_range = year == YEAR_RANGE_SENTINEL

    combined_query = title
    if year and year != ALL_YEARS and not is_year_range:
        combined_query += (" " if combined_query else "") + year
    if combined_query:
        params["query_term"] = combined_query.strip()

    if year == ALL_YEARS or is_year_range:
        params.pop("year", None)
    return params


def _person(entry: Dict[str, Any]) -> Person:
    return Person(
        name=entry.get("displayName"),
        image=(entry.get("primaryImage") or {}).get("url"),
        id=entry.get("id"),
    )


def apply_imdb_metadata(movie: Dict[str, Any], title: Dict[str, Any]) -> Dict[str, Any]:
    directors = title.get("directors") or []
    if directors:
        movie["directors"] = [asdict(_person(d)) for d in directors]
        movie["director"] = ", ".join(d.get("displayName") or "" for d in directors)

    stars = title.get("stars") or []
    if stars:
        movie["actors"] = [asdict(_person(s)) for s in stars]

    if title.get("plot"):
        movie["plot_summary"] = title["plot"]
    return movie


class MovieManager:
    def __init__(
        self,
        listing: IMovieListingService,
        metadata: IMetadataService,
        subtitles: ISubtitleService,
        aggregator: IAggregationService,
        settings: Settings,
        logger: BoundLogger,
    ):
        self.listing = listing
        self.metadata = metadata
        self.subtitles = subtitles
        self.aggregator = aggregator
        self.settings = settings
        self.logger = logger

    async def list_movies(self, query: Dict[str, Any]) -> Dict[str, Any]:
        """List movies, merging upstream pages when the "2000 and below" filter is set."""
        is_year_range = query.get("year") == YEAR_RANGE_SENTINEL
        params = build_listing_params(query)
        self.logger.info("Listing movies", params=params, year_range=is_year_range)

        if not is_year_range:
            return await self.listing.list_movies(params)

        limit = parse_positive_int(params.get("limit"), DEFAULT_LIMIT)
        page = parse_positive_int(params.get("page"), DEFAULT_PAGE)
        pages = await self.listing.fetch_pages(
            params,
            page_count=self.settings.year_range_max_pages,
            limit=self.settings.year_range_fetch_limit,
        )
        response = self.aggregator.aggregate(pages, page=page, limit=limit)
        self.logger.info(
            "Year range listing built",
            movie_count=response.data.movie_count,
            page_number=response.data.page_number,
            page_count=response.data.page_count,
        )
        return response.model_dump()

    async def movie_details(self, movie_id: str) -> Dict[str, Any]:
        """YTS movie details, enriched with IMDb directors, stars and plot when available."""
        details = await self.listing.movie_details(movie_id)
        movie = self._movie_of(details)
        imdb_code = movie.get("imdb_code") if movie else None
        if not imdb_code:
            return details

        try:
            title = await self.metadata.get_title(imdb_code)
        except UpstreamError as e:
            self.logger.error("Error fetching IMDb data", imdb_code=imdb_code, error=e.reason)
            return details

        if isinstance(title, dict):
            apply_imdb_metadata(movie, title)
        return details

    def _movie_of(self, details: Any) -> Optional[Dict[str, Any]]:
        data = details.get("data") if isinstance(details, dict) else None
        movie = data.get("movie") if isinstance(data, dict) else None
        return movie if isinstance(movie, dict) else None

    async def imdb_details(self, imdb_code: str) -> Dict[str, Any]:
        return await self.metadata.get_title(imdb_code)

    async def suggestions(self, movie_id: str) -> Dict[str, Any]:
        return await self.listing.movie_suggestions(movie_id)

    async def search_subtitles(self, imdb_id: str) -> Dict[str, Any]:
        return await self.subtitles.search_subtitles(imdb_id)

    async def download_subtitle(self, subtitle_id: str):
        return await self.subtitles.download_subtitle(subtitle_id)
