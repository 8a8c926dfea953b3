"""Keyword search over the component index."""


def _field(component: dict, key: str) -> str:
    value = component.get(key)
    return value if isinstance(value, str) else ""


def search_components(components: list[dict], query: str) -> list[dict]:
    """Return components whose name or description contains `query`, ignoring case.

    Index order is preserved. An empty query matches every component.
    """
    q = query.lower()
    return [
        c for c in components
        if isinstance(c, dict)
        and (q in _field(c, "name").lower() or q in _field(c, "description").lower())
    ]
