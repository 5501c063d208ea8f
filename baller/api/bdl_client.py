# baller/api/bdl_client.py
from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from ..config import BallerConfig
from ..errors import DecodeError, NetworkError


def _get_headers(config: BallerConfig) -> Dict[str, str]:
    """Return auth headers for the balldontlie API (none when no key is set)."""
    if not config.api_key:
        return {}
    return {"Authorization": config.api_key}


def build_query(params: Optional[Mapping[str, Any]]) -> List[Tuple[str, Any]]:
    """
    Flatten query parameters into ordered (key, value) pairs.

    List values become repeated `key[]` pairs, e.g.
    {"player_ids": [1, 2]} -> [("player_ids[]", 1), ("player_ids[]", 2)].
    """
    pairs: List[Tuple[str, Any]] = []
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((f"{key}[]", item) for item in value)
        else:
            pairs.append((key, value))
    return pairs


def bdl_get(
    config: BallerConfig, path: str, params: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Low-level helper for GET requests to the balldontlie API.

    Args:
        config: API settings (base url, key, timeout).
        path: Service path appended to the base url, e.g. '/players'.
        params: Optional query parameters; list values are sent as `key[]`.

    Returns:
        Parsed JSON response as a dict.

    Raises:
        NetworkError on transport failure or a non-200 status.
        DecodeError if the body is not a JSON object.
    """
    url = f"{config.base_url}{path}"
    try:
        response = requests.get(
            url,
            headers=_get_headers(config),
            params=build_query(params),
            timeout=config.timeout,
        )
    except requests.RequestException as exc:
        raise NetworkError(f"balldontlie API request to {url} failed: {exc}") from exc

    if response.status_code != 200:
        raise NetworkError(
            f"balldontlie API error {response.status_code}: {response.text}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as exc:
        raise DecodeError(f"balldontlie API returned non-JSON body from {url}") from exc

    if not isinstance(data, dict):
        raise DecodeError(
            f"balldontlie API returned {type(data).__name__}, expected an object"
        )
    return data


def response_items(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the `data` list of a response, failing loudly on any other shape."""
    items = data.get("data")
    if not isinstance(items, list):
        raise DecodeError(f"Response has no 'data' list. Full response: {data}")
    return items
