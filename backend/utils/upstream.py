from typing import Any, Dict, Optional

import httpx
import orjson

from domain.exceptions import UpstreamError


async def get_response(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    try:
        response = await client.get(url, params=params, headers=headers)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise UpstreamError(url, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise UpstreamError(url, str(e) or type(e).__name__) from e
    return response


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    """GET `url` and decode the body, raising UpstreamError on any failure."""
    response = await get_response(client, url, params=params, headers=headers)
    try:
        return orjson.loads(response.content)
    except orjson.JSONDecodeError as e:
        raise UpstreamError(url, "invalid JSON body") from e
