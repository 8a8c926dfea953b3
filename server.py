"""
iOS Components MCP Server.
Exposes the iOS UIKit component catalog (and upstream change checks) to agents over stdio.
Register with: claude mcp add ios-components -- python /path/to/server.py
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from ios_components import __version__, tools
from ios_components.config import load_settings

logger = logging.getLogger("ios_components.server")

mcp = FastMCP(
    "ios-components",
    instructions=(
        "Catalog of iOS UIKit design-system components. Use list_components or "
        "search_components to find a component, then get_component for its full spec."
    ),
)
# FastMCP reports the mcp package version unless the low-level server is told otherwise.
mcp._mcp_server.version = __version__


# --- Resources: catalog data for context ---

@mcp.resource("ios-components://index", mime_type="application/json")
async def components_index_resource() -> str:
    """Component index: name, description and tags for every iOS component."""
    return await tools.list_components()


# --- Tools ---

@mcp.tool()
async def list_components() -> str:
    """List all available iOS UIKit components with their descriptions."""
    return await tools.list_components()


@mcp.tool()
async def get_component(name: str) -> str:
    """
    Get full specification for an iOS component including properties, usage examples, and tags.
    name: Component name (e.g., ChipsView, ContextMenuView)
    """
    return await tools.get_component(name)


@mcp.tool()
async def search_components(query: str) -> str:
    """
    Search for iOS components by keyword (matches name or description, case-insensitive).
    query: Search query (e.g., 'filter', 'menu', 'avatar')
    """
    return await tools.search_components(query)


@mcp.tool()
async def check_updates() -> str:
    """
    Check whether origin/main has new commits: lists new, modified and deleted
    component sources and specs, plus the commit log. Only fetches; never merges.
    """
    return await tools.check_updates()


def main():
    """Run the MCP server on stdio. Logs go to stderr; stdout carries the protocol."""
    settings = load_settings()
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("mcp").setLevel(settings.log_level)
    logger.info("[server] ios-components %s serving %s", __version__, settings.base_url)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
