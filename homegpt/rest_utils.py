"""Outbound REST helpers for talking to the inference server."""

import logging
from typing import Any

import requests
from pydantic import BaseModel

from .errors import TransportError, UpstreamStatusError

logger = logging.getLogger(__name__)


def serialize_payload(payload: Any) -> Any:
    """Turn ``payload`` into plain JSON data; ``None`` model fields are dropped."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    return payload


def _read_body(response: requests.Response) -> bytes:
    if not response.ok:
        logger.error(f"Upstream error: {response.status_code} - {response.text[:200]}")
        raise UpstreamStatusError(response.status_code, response.text)
    body = response.content
    logger.debug(f"Received {len(body)} bytes from {response.url}")
    return body


def send_post_request(url: str, payload: Any, timeout: float | None = None) -> bytes:
    """
    POST ``payload`` as JSON to ``url`` and return the raw response body.

    A fresh session is opened for every call and closed afterwards; nothing is
    retried.

    Raises:
        UpstreamStatusError: the server replied with a non-2xx status.
        TransportError: the request could not be sent or the reply not read.
    """
    data = serialize_payload(payload)
    try:
        with requests.Session() as session:
            response = session.post(url, json=data, timeout=timeout)
            return _read_body(response)
    except requests.exceptions.RequestException as e:
        logger.error(f"POST {url!r} failed: {e}")
        raise TransportError(str(e)) from e


def send_get_request(url: str, timeout: float | None = None) -> bytes:
    """GET ``url`` and return the raw response body, with the same error rules as POST."""
    try:
        with requests.Session() as session:
            response = session.get(url, timeout=timeout)
            return _read_body(response)
    except requests.exceptions.RequestException as e:
        logger.error(f"GET {url!r} failed: {e}")
        raise TransportError(str(e)) from e
