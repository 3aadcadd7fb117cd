from typing import Any, Dict, List

from pydantic import BaseModel


class MovieListData(BaseModel):
    movie_count: int
    limit: int
    page_number: int
    movies: List[Dict[str, Any]]
    page_count: int


class MovieListResponse(BaseModel):
    status: str = "ok"
    status_message: str = "Query was successful"
    data: MovieListData
