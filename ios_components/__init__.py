"""
MCP tool server for the iOS UIKit component catalog.

Architecture: 1 Server, 4 Tools
  - Catalog client: list_components, get_component, search_components
  - Git introspection: check_updates
"""

__version__ = "1.0.0"
