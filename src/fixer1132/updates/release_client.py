# src/fixer1132/updates/release_client.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from .. import __version__
from .semver import is_newer, normalize

logger = logging.getLogger(__name__)

_EXPECTED_HOST = "github.com"


@dataclass(frozen=True, slots=True)
class ReleaseInfo:
    version: str
    html_url: str


class UpdateCheckError(Exception):
    """Base class for everything that can go wrong while fetching release metadata."""


class NetworkFailure(UpdateCheckError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedRelease(UpdateCheckError):
    pass


def _request_headers(settings: Any) -> dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "User-Agent": str(getattr(settings, "app_name", "1132 Fixer")).replace(" ", ""),
        "Cache-Control": "no-cache",
        "Pragma": "no-cache",
    }


def _is_expected_release_url(raw: str) -> bool:
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, TypeError):
        return False
    host = url.host or ""
    return url.scheme == "https" and (host == _EXPECTED_HOST or host.endswith("." + _EXPECTED_HOST))


def parse_release(payload: Any) -> ReleaseInfo:
    """Validate a GitHub release JSON object and turn it into ReleaseInfo."""
    if not isinstance(payload, dict):
        raise MalformedRelease("Release metadata is not a JSON object.")

    tag = payload.get("tag_name")
    html_url = payload.get("html_url")
    if not isinstance(tag, str) or not tag.strip():
        raise MalformedRelease("Release metadata has no tag_name.")
    if not isinstance(html_url, str) or not html_url.strip():
        raise MalformedRelease("Release metadata has no html_url.")

    # /releases/latest should already exclude these; keep a guardrail anyway.
    if payload.get("draft") is True or payload.get("prerelease") is True:
        raise MalformedRelease("Latest release is not a stable release.")

    if not _is_expected_release_url(html_url.strip()):
        raise MalformedRelease("Invalid release URL.")

    return ReleaseInfo(version=normalize(tag), html_url=html_url.strip())


async def fetch_latest_release(settings: Any, *, client: httpx.AsyncClient | None = None) -> ReleaseInfo:
    """
    GET the latest release from the GitHub API.

    Raises NetworkFailure (non-2xx, transport error) or MalformedRelease
    (bad JSON, draft/prerelease, unexpected URL).
    """
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await _fetch(own_client, settings)
    return await _fetch(client, settings)


async def _fetch(client: httpx.AsyncClient, settings: Any) -> ReleaseInfo:
    timeout = float(getattr(settings, "update_timeout_seconds", 10.0))
    try:
        resp = await client.get(
            settings.releases_api_url,
            headers=_request_headers(settings),
            timeout=timeout,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise NetworkFailure(f"Release check failed: {e.__class__.__name__}") from e

    if not resp.is_success:
        raise NetworkFailure(f"GitHub API returned HTTP {resp.status_code}.", status_code=resp.status_code)

    try:
        payload = resp.json()
    except ValueError as e:
        raise MalformedRelease("Release metadata is not valid JSON.") from e

    return parse_release(payload)


async def check_for_update(
    current_version: str | None,
    settings: Any,
    *,
    client: httpx.AsyncClient | None = None,
) -> ReleaseInfo | None:
    """
    Best-effort update check.

    Returns a release only if it is newer than `current_version`.
    Every failure is swallowed: an update check must never get in the way.
    """
    if not getattr(settings, "update_check_enabled", True):
        return None

    current = current_version or __version__
    try:
        release = await fetch_latest_release(settings, client=client)
    except UpdateCheckError as e:
        logger.debug("Update check failed: %s", e)
        return None

    if is_newer(current, release.version):
        logger.info("Update available: %s (running %s)", release.version, current)
        return release

    logger.debug("No update: latest=%s running=%s", release.version, current)
    return None
