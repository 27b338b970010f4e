"""
boilerhatch.locator - Template Repository Lookup
================================================

Confirms the template repository exists by asking the GitHub REST API for
its metadata. The metadata itself is only used for diagnostics.

Every failure surfaces as :class:`RepositoryNotFoundError`. A 404 raises it
directly; transport errors, auth failures and rate limiting raise the
:class:`RepositoryLookupError` subclass so the message says what happened.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from boilerhatch.config import Settings
from boilerhatch.exceptions import RepositoryLookupError, RepositoryNotFoundError
from boilerhatch.models import RepositoryReference


logger = logging.getLogger(__name__)

GITHUB_API_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


def locate_repository(
    reference: RepositoryReference,
    settings: Settings | None = None,
    *,
    client: httpx.Client | None = None,
) -> dict[str, Any]:
    """
    Fetch metadata for the template repository.

    Parameters
    ----------
    reference : RepositoryReference
        Owner/repo pair to look up.

    settings : Settings | None
        Supplies the timeout and optional GitHub token.

    client : httpx.Client | None
        Client to use; one is created (and closed) when omitted.

    Returns
    -------
    dict[str, Any]
        The repository metadata returned by the API.

    Raises
    ------
    RepositoryNotFoundError
        If the API reports no such repository.
    RepositoryLookupError
        If the API could not be reached or refused the request.
    """
    settings = settings or Settings()
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.http_timeout_seconds, follow_redirects=True)

    headers = {**GITHUB_API_HEADERS, **settings.auth_headers()}
    logger.debug("GET %s", reference.api_url)

    try:
        response = client.get(reference.api_url, headers=headers)
    except httpx.HTTPError as e:
        raise RepositoryLookupError(
            reference.full_name,
            f"Could not reach GitHub to look up '{reference.full_name}': {e}",
        ) from e
    finally:
        if owns_client:
            client.close()

    if response.status_code == 404:
        raise RepositoryNotFoundError(reference.full_name)

    if response.status_code != 200:
        reason = response.reason_phrase or "error"
        if response.headers.get("x-ratelimit-remaining") == "0":
            reason = "rate limit exceeded"
        raise RepositoryLookupError(
            reference.full_name,
            f"GitHub returned {response.status_code} ({reason}) for '{reference.full_name}'",
        )

    try:
        metadata = response.json()
    except ValueError as e:
        raise RepositoryLookupError(
            reference.full_name,
            f"GitHub returned invalid JSON for '{reference.full_name}'",
        ) from e

    if not isinstance(metadata, dict):
        raise RepositoryLookupError(
            reference.full_name,
            f"Unexpected metadata for '{reference.full_name}'",
        )

    return metadata
