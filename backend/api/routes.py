from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from structlog.stdlib import BoundLogger

from core.service_factories import get_logger, get_movie_manager
from domain.exceptions import UpstreamError
from managers.movie_manager import MovieManager

router = APIRouter()


def upstream_failure(logger: BoundLogger, message: str, error: UpstreamError, **context) -> JSONResponse:
    logger.error(message, url=error.url, error=error.reason, **context)
    return JSONResponse(status_code=500, content={"error": message})


@router.get("/movies")
@router.get("/search")
async def get_movies(
    request: Request,
    manager: MovieManager = Depends(get_movie_manager),
    logger: BoundLogger = Depends(get_logger),
):
    # filters: limit, page, quality, minimum_rating, query_term, genre, sort_by, order_by, year
    try:
        return await manager.list_movies(dict(request.query_params))
    except UpstreamError as e:
        return upstream_failure(logger, "Failed to fetch movies", e)


@router.get("/movies/{movie_id}")
async def get_movie_details(
    movie_id: str,
    manager: MovieManager = Depends(get_movie_manager),
    logger: BoundLogger = Depends(get_logger),
):
    try:
        return await manager.movie_details(movie_id)
    except UpstreamError as e:
        return upstream_failure(logger, "Failed to fetch movie details", e, movie_id=movie_id)


@router.get("/imdb/{imdb_code}")
async def get_imdb_details(
    imdb_code: str,
    manager: MovieManager = Depends(get_movie_manager),
    logger: BoundLogger = Depends(get_logger),
):
    try:
        return await manager.imdb_details(imdb_code)
    except UpstreamError as e:
        return upstream_failure(logger, "Failed to fetch IMDB details", e, imdb_code=imdb_code)


@router.get("/suggestions/{movie_id}")
async def get_suggestions(
    movie_id: str,
    manager: MovieManager = Depends(get_movie_manager),
    logger: BoundLogger = Depends(get_logger),
):
    try:
        return await manager.suggestions(movie_id)
    except UpstreamError as e:
        return upstream_failure(logger, "Failed to fetch suggestions", e, movie_id=movie_id)


@router.get("/subtitles")
async def get_subtitles(
    imdbId: Optional[str] = None,
    manager: MovieManager = Depends(get_movie_manager),
    logger: BoundLogger = Depends(get_logger),
):
    if not imdbId:
        return JSONResponse(status_code=400, content={"error": "IMDB ID is required"})
    try:
        return await manager.search_subtitles(imdbId)
    except UpstreamError as e:
        return upstream_failure(logger, "Failed to fetch subtitles", e, imdb_id=imdbId)


@router.get("/subtitles/{subtitle_id}/download")
async def download_subtitle(
    subtitle_id: str,
    manager: MovieManager = Depends(get_movie_manager),
    logger: BoundLogger = Depends(get_logger),
):
    try:
        archive = await manager.download_subtitle(subtitle_id)
    except UpstreamError as e:
        return upstream_failure(logger, "Failed to download subtitle", e, subtitle_id=subtitle_id)

    return Response(
        content=archive.content,
        media_type=archive.content_type or "application/zip",
        headers={
            "Content-Disposition": archive.content_disposition
            or f'attachment; filename="subtitle-{subtitle_id}.zip"'
        },
    )
