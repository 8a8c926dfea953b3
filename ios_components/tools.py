"""
Handlers behind the 4 MCP tools.

Tools 1-3: Read the remote component catalog (index + per-component specs).
Tool 4: Report upstream commits using the local git working copy.

Every handler returns text. Failures are narrated in that text instead of
raised, so the calling agent always gets a readable tool result.
"""

import asyncio
import json
import logging

from ios_components.catalog import CatalogClient
from ios_components.config import Settings, load_settings
from ios_components.errors import (
    CatalogError,
    ComponentNotFound,
    InvalidArguments,
    RemoteUnavailable,
)
from ios_components.search import search_components as filter_components
from ios_components.vcs import GitRepository, compute_update_report, render_update_report

logger = logging.getLogger(__name__)


def _dump(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def make_client(settings: Settings | None = None) -> CatalogClient:
    settings = settings or load_settings()
    return CatalogClient(settings.base_url, timeout=settings.http_timeout)


def make_repository(settings: Settings | None = None) -> GitRepository:
    settings = settings or load_settings()
    return GitRepository(
        settings.repo_root,
        remote=settings.git_remote,
        branch=settings.git_branch,
        timeout=settings.git_timeout,
    )


def _index_failure(e: RemoteUnavailable) -> str:
    return f"Failed to fetch component index: {e.status} {e.reason}".rstrip()


# ────────────── Tool 1: list_components ──────────────

async def list_components(client: CatalogClient | None = None) -> str:
    client = client or make_client()
    try:
        components = await client.fetch_components()
    except RemoteUnavailable as e:
        return _index_failure(e)
    except CatalogError as e:
        return f"Error fetching components: {e}"
    except Exception as e:
        logger.exception("[tools] list_components failed")
        return f"Unexpected error in list_components: {e}"
    return _dump(components)


# ────────────── Tool 2: get_component ──────────────

def _require_text(tool: str, arg: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArguments(tool, f"'{arg}' must be a non-empty string.")
    return value


async def get_component(name: str, client: CatalogClient | None = None) -> str:
    try:
        name = _require_text("get_component", "name", name)
    except InvalidArguments as e:
        return str(e)

    client = client or make_client()
    try:
        spec = await client.fetch_component_spec(name)
    except ComponentNotFound:
        return f'Component "{name}" not found. Use list_components to see available components.'
    except CatalogError as e:
        return f'Error fetching component "{name}": {e}'
    except Exception as e:
        logger.exception("[tools] get_component(%r) failed", name)
        return f"Unexpected error in get_component: {e}"
    return _dump(spec)


# ────────────── Tool 3: search_components ──────────────

async def search_components(query: str, client: CatalogClient | None = None) -> str:
    if not isinstance(query, str):
        return str(InvalidArguments("search_components", "'query' must be a string."))

    client = client or make_client()
    try:
        components = await client.fetch_components()
    except RemoteUnavailable as e:
        return _index_failure(e)
    except CatalogError as e:
        return f"Error searching components: {e}"
    except Exception as e:
        logger.exception("[tools] search_components(%r) failed", query)
        return f"Unexpected error in search_components: {e}"

    matches = filter_components(components, query)
    if not matches:
        return (
            f'No components found matching "{query}". '
            "Use list_components to see all available components."
        )
    return _dump(matches)


# ────────────── Tool 4: check_updates ──────────────

async def check_updates(repository: GitRepository | None = None,
                        watch_prefixes: tuple[str, ...] | None = None) -> str:
    """Run the upstream check in a worker thread; git calls block."""
    if repository is None or watch_prefixes is None:
        settings = load_settings()
        repository = repository or make_repository(settings)
        watch_prefixes = settings.watch_prefixes if watch_prefixes is None else watch_prefixes
    try:
        result = await asyncio.to_thread(compute_update_report, repository, tuple(watch_prefixes))
    except Exception as e:
        logger.exception("[tools] check_updates failed")
        return f"Unexpected error in check_updates: {e}"
    return render_update_report(result)
