from __future__ import annotations
import json
import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

import requests
from urllib3.exceptions import HTTPError, ReadTimeoutError

from .normalize import normalize_vehicles


DEFAULT_BASE_URL = "https://welikebikes.cycly.cloud/rest/extension"
DEFAULT_TIMEOUT = 15.0
READ_CHUNK_SIZE = 64 * 1024

log = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Required configuration (the Cycly token) is missing."""


class UpstreamError(RuntimeError):
    """The Cycly API could not be reached or returned an unusable response."""


@dataclass
class CyclyConfig:
    token: str
    base_url: str = DEFAULT_BASE_URL
    branch_id: str = "1"
    timeout: float = DEFAULT_TIMEOUT

    @property
    def vehicles_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/vehicles/branch/{self.branch_id}"


def build_session(cfg: CyclyConfig) -> requests.Session:
    s = requests.Session()
    s.headers.update(
        {
            "Authorization": f"Bearer {cfg.token}",
            "Accept": "application/json",
            "User-Agent": "cycly-export/1.0",
        }
    )
    return s


def _read_body(resp: requests.Response, deadline: float, timeout: float) -> bytes:
    # socket timeouts only bound each read; the deadline bounds the whole body
    chunks: List[bytes] = []
    try:
        while True:
            if time.monotonic() > deadline:
                raise UpstreamError(f"Cycly request timed out after {timeout:g}s")
            chunk = resp.raw.read1(READ_CHUNK_SIZE, decode_content=True)
            if not chunk:
                break
            chunks.append(chunk)
    except ReadTimeoutError:
        raise UpstreamError(f"Cycly request timed out after {timeout:g}s")
    except (HTTPError, OSError) as e:
        raise UpstreamError(f"Cycly request failed: {e}")
    return b"".join(chunks)


def _get_json(session: requests.Session, url: str, timeout: float):
    deadline = time.monotonic() + timeout
    try:
        resp = session.get(url, timeout=timeout, stream=True)
    except requests.Timeout:
        raise UpstreamError(f"Cycly request timed out after {timeout:g}s")
    except requests.RequestException as e:
        raise UpstreamError(f"Cycly request failed: {e}")
    try:
        if not resp.ok:
            raise UpstreamError(f"Cycly request failed with status {resp.status_code} {resp.reason or ''}".rstrip())
        body = _read_body(resp, deadline, timeout)
    finally:
        resp.close()
    try:
        return json.loads(body)
    except ValueError as e:
        raise UpstreamError(f"Cycly returned invalid JSON: {e}")


def fetch_vehicles(cfg: CyclyConfig, session: Optional[requests.Session] = None) -> List[Dict]:
    """Fetch every vehicle of the configured branch as a flat list.

    Cycly answers either with a JSON array or with an object keyed by vehicle
    ID ({"251": {...}, ...}); both are normalized to a list of records.
    Raises ConfigurationError without touching the network when no token is set.
    """
    if not (cfg.token or "").strip():
        raise ConfigurationError("Missing CYCLY_TOKEN environment variable")

    url = cfg.vehicles_url
    log.info(f"Starting Cycly fetch from {url}")
    own_session = session is None
    s = session if session is not None else build_session(cfg)
    try:
        payload = _get_json(s, url, cfg.timeout)
    finally:
        if own_session:
            s.close()

    try:
        vehicles = normalize_vehicles(payload)
    except TypeError as e:
        raise UpstreamError(str(e))
    log.info(f"Fetched {len(vehicles)} vehicles from Cycly")
    return vehicles
