from abc import ABC, abstractmethod
from typing import Any, Dict, List

from schemas.movies import MovieListResponse

from .entities import ListingPage, SubtitleArchive


class IMovieListingService(ABC):
    @abstractmethod
    async def list_movies(self, params: Dict[str, Any]) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def fetch_pages(
        self, params: Dict[str, Any], page_count: int, limit: int
    ) -> List[ListingPage]:
        pass

    @abstractmethod
    async def movie_details(self, movie_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def movie_suggestions(self, movie_id: str) -> Dict[str, Any]:
        pass


class IMetadataService(ABC):
    @abstractmethod
    async def get_title(self, imdb_code: str) -> Dict[str, Any]:
        pass


class ISubtitleService(ABC):
    @abstractmethod
    async def search_subtitles(self, imdb_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def download_subtitle(self, subtitle_id: str) -> SubtitleArchive:
        pass


class IAggregationService(ABC):
    @abstractmethod
    def aggregate(
        self, pages: List[ListingPage], page: int, limit: int
    ) -> MovieListResponse:
        pass
