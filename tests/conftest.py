"""Shared fixtures: an in-memory catalog host and a fake git working copy."""

import httpx
import pytest

from ios_components.catalog import CatalogClient
from ios_components.errors import GitCommandError
from ios_components.vcs import ChangedPaths

BASE_URL = "https://catalog.test/specs"

INDEX = {
    "components": [
        {"name": "ChipsView", "description": "Horizontal row of filter chips", "tags": ["filter", "chips"]},
        {"name": "CheckboxView", "description": "Checkbox with optional label", "tags": ["form"]},
        {"name": "ContextMenuView", "description": "Popup menu anchored to a view", "tags": ["menu"]},
    ]
}

SPECS = {
    "ChipsView": {
        "name": "ChipsView",
        "properties": [{"name": "chips", "type": "[String]"}, {"name": "isMultiSelect", "type": "Bool"}],
        "usage": "let chips = ChipsView(chips: [\"All\", \"New\"])",
        "tags": ["filter", "chips"],
    },
    "CheckboxView": {"name": "CheckboxView", "properties": [], "unicode": "✓"},
}


def catalog_app(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/specs/index.json":
        return httpx.Response(200, json=INDEX)
    prefix = "/specs/components/"
    if path.startswith(prefix) and path.endswith(".json"):
        name = path[len(prefix):-len(".json")]
        if name in SPECS:
            return httpx.Response(200, json=SPECS[name])
    return httpx.Response(404, text="404: Not Found")


def make_client(handler) -> CatalogClient:
    return CatalogClient(BASE_URL, timeout=5.0, transport=httpx.MockTransport(handler))


@pytest.fixture
def client():
    return make_client(catalog_app)


@pytest.fixture
def failing_client():
    """Catalog host that answers every request with HTTP 500."""
    return make_client(lambda request: httpx.Response(500))


@pytest.fixture
def offline_client():
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    return make_client(refuse)


class FakeGit:
    """Stands in for GitRepository; `fail` names the methods that raise."""

    local_ref = "main"
    remote_ref = "origin/main"

    def __init__(self, behind=0, changed=None, log="", fail=()):
        self.behind = behind
        self.changed = changed or ChangedPaths()
        self.log = log
        self.fail = set(fail)
        self.calls = []

    def _check(self, method):
        self.calls.append(method)
        if method in self.fail:
            raise GitCommandError([method], "fatal: unable to access remote")

    def fetch_remote_refs(self):
        self._check("fetch_remote_refs")

    def count_ahead_commits(self, base, head):
        self._check("count_ahead_commits")
        return self.behind

    def diff_paths(self, base, head):
        self._check("diff_paths")
        return self.changed

    def format_log(self, base, head):
        self._check("format_log")
        return self.log

