import math
from typing import Any, Dict, List, Optional

from injector import inject
from structlog.stdlib import BoundLogger

from core.settings import Settings
from domain.entities import ListingPage
from domain.interfaces import IAggregationService
from schemas.movies import MovieListData, MovieListResponse


def movie_year(movie: Dict[str, Any]) -> Optional[int]:
    """Numeric year of a movie, 0 when absent, None when not a number."""
    year = movie.get("year") or 0
    try:
        return int(year)
    except (TypeError, ValueError):
        return None


def is_well_formed(movie: Any) -> bool:
    if not isinstance(movie, dict) or movie_year(movie) is None:
        return False
    try:
        hash(movie.get("id"))
    except TypeError:
        return False
    return True


def page_movies(listing_page: ListingPage) -> List[Dict[str, Any]]:
    """Movies carried by one fetched page; empty for failed or malformed pages."""
    data = (listing_page.payload or {}).get("data")
    if not isinstance(data, dict):
        return []
    movies = data.get("movies")
    if not isinstance(movies, list):
        return []
    return [m for m in movies if is_well_formed(m)]


def merge_pages(pages: List[ListingPage]) -> List[Dict[str, Any]]:
    candidates = []
    for listing_page in pages:
        candidates.extend(page_movies(listing_page))
    return candidates


def filter_by_max_year(movies: List[Dict[str, Any]], max_year: int) -> List[Dict[str, Any]]:
    # unknown year counts as 0 and is kept
    return [m for m in movies if movie_year(m) <= max_year]


def deduplicate_by_id(movies: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    seen_ids = set()
    unique = []
    for movie in movies:
        movie_id = movie.get("id")
        if movie_id not in seen_ids:
            seen_ids.add(movie_id)
            unique.append(movie)
    return unique


def paginate(movies: List[Dict[str, Any]], page: int, limit: int) -> List[Dict[str, Any]]:
    start_index = (page - 1) * limit
    end_index = start_index + limit
    return movies[start_index:end_index]


class MovieAggregationService(IAggregationService):
    @inject
    def __init__(self, settings: Settings, logger: BoundLogger):
        self.max_year = settings.year_range_max_year
        self.logger = logger

    def aggregate(self, pages: List[ListingPage], page: int, limit: int) -> MovieListResponse:
        """
        Merge fetched listing pages into a single paginated envelope.

        Pages are merged in page order, filtered to ``year <= max_year``,
        deduplicated by ``id`` (first occurrence wins) and sliced to the
        requested page. ``movie_count`` and ``page_count`` describe the
        filtered set, not the upstream catalog.
        """
        candidates = merge_pages(pages)
        filtered = filter_by_max_year(candidates, self.max_year)
        unique = deduplicate_by_id(filtered)
        movies = paginate(unique, page, limit)

        self.logger.info(
            "Year range aggregation completed",
            candidates=len(candidates),
            filtered_count=len(filtered),
            unique_count=len(unique),
            duplicates_removed=len(filtered) - len(unique),
            page_number=page,
            returned=len(movies),
        )

        return MovieListResponse(
            data=MovieListData(
                movie_count=len(unique),
                limit=limit,
                page_number=page,
                movies=movies,
                page_count=math.ceil(len(unique) / limit),
            )
        )
