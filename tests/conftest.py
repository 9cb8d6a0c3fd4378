"""Pytest configuration and shared fixtures."""

import json
from urllib.parse import urlparse, unquote

import pytest
import requests

from neontestdb.client import Client
from neontestdb.utils.config import Config
from neontestdb.utils.debug_logger import DebugLogger

pytest_plugins = ["pytester"]

BASE_URL = "https://console.neon.tech/api/v2"
API_PATH = urlparse(BASE_URL).path


def make_response(status_code, body, url, method="GET"):
    """Build a real requests.Response carrying a JSON (or raw text) body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if isinstance(body, (bytes, str)):
        response._content = body.encode() if isinstance(body, str) else body
    else:
        response._content = json.dumps(body).encode()
        response.headers["Content-Type"] = "application/json"
    response.request = requests.Request(method, url).prepare()
    return response


class FakeNeonAPI:
    """In-memory stand-in for the Neon branch endpoints.

    Installed in place of ``requests.request``. Branch names are unique:
    creating a name that already exists answers 409.
    """

    def __init__(self, project_id="p1", parent="main", api_key="test-key"):
        self.project_id = project_id
        self.api_key = api_key
        self.branches = {}
        self.calls = []
        self.locked_responses = 0
        self.omit_connection_uris = False
        self.overrides = []
        self._next_id = 0
        self.parent = self.add_branch(parent, default=True, primary=True)

    def add_branch(self, name, parent_id=None, **extra):
        self._next_id += 1
        branch = {
            "id": f"br-{self._next_id:04d}",
            "project_id": self.project_id,
            "parent_id": parent_id,
            "name": name,
            "current_state": "ready",
            "primary": False,
            "default": False,
            "protected": False,
            "cpu_used_sec": 0,
            "created_at": "2026-10-19T08:00:00Z",
            "updated_at": "2026-10-19T08:00:00Z",
            "created_by": {"name": "tester", "image": ""},
        }
        branch.update(extra)
        self.branches[branch["id"]] = branch
        return branch

    def by_name(self, name):
        for branch in self.branches.values():
            if branch["name"] == name:
                return branch
        return None

    def respond_once(self, status_code, body):
        """Answer the next request with a canned response."""
        self.overrides.append((status_code, body))

    def __call__(self, method, url, headers=None, json=None, timeout=None, **kwargs):
        self.calls.append({"method": method, "url": url, "headers": headers, "json": json, "timeout": timeout})

        if self.overrides:
            status_code, body = self.overrides.pop(0)
            return make_response(status_code, body, url, method)

        if headers.get("Authorization") != f"Bearer {self.api_key}":
            return make_response(401, {"message": "authentication required"}, url, method)

        path = urlparse(url).path[len(API_PATH):]
        parts = [unquote(part) for part in path.strip("/").split("/")]

        if len(parts) < 3 or parts[0] != "projects" or parts[2] != "branches":
            return make_response(404, {"message": "not found"}, url, method)
        if parts[1] != self.project_id:
            return make_response(404, {"message": "project not found"}, url, method)

        if len(parts) == 3 and method == "GET":
            return make_response(200, {"branches": list(self.branches.values()), "annotations": {}}, url, method)
        if len(parts) == 3 and method == "POST":
            return self._create(json, url)
        if len(parts) == 4:
            branch = self.branches.get(parts[3])
            if branch is None:
                return make_response(404, {"message": "branch not found"}, url, method)
            if method == "GET":
                return make_response(200, {"branch": branch}, url, method)
            if method == "DELETE":
                del self.branches[branch["id"]]
                return make_response(200, {"branch": branch, "operations": []}, url, method)

        return make_response(405, {"message": "method not allowed"}, url, method)

    def _create(self, body, url):
        if self.locked_responses > 0:
            self.locked_responses -= 1
            return make_response(423, {"message": "project already has running conflicting operations"}, url, "POST")

        name = body["branch"]["name"]
        parent_id = body["branch"]["parent_id"]
        if self.by_name(name) is not None:
            return make_response(409, {"message": f"branch {name} already exists"}, url, "POST")
        if parent_id not in self.branches:
            return make_response(400, {"message": "parent branch not found"}, url, "POST")

        branch = self.add_branch(name, parent_id=parent_id, current_state="init", creation_source="neontestdb")
        endpoint_id = f"ep-{branch['id'][3:]}"
        host = f"{endpoint_id}.us-east-2.aws.neon.tech"
        created = {
            "branch": branch,
            "endpoints": [
                {"id": endpoint_id, "host": host, "branch_id": branch["id"], "type": endpoint["type"],
                 "current_state": "init", "settings": {}, "autoscaling_limit_min_cu": 0.25}
                for endpoint in body["endpoints"]
            ],
            "operations": [
                {"id": "op-1", "project_id": self.project_id, "branch_id": branch["id"],
                 "action": "create_branch", "status": "running", "failures_count": 0},
                {"id": "op-2", "project_id": self.project_id, "branch_id": branch["id"],
                 "endpoint_id": endpoint_id, "action": "start_compute", "status": "scheduling",
                 "failures_count": 0},
            ],
            "roles": [{"branch_id": branch["id"], "name": "neondb_owner", "protected": False}],
            "databases": [{"id": 1, "branch_id": branch["id"], "name": "neondb", "owner_name": "neondb_owner"}],
            "connection_uris": [
                {
                    "connection_uri": f"postgresql://neondb_owner:secret@{host}/neondb?sslmode=require",
                    "connection_parameters": {"database": "neondb", "password": "secret",
                                              "role": "neondb_owner", "host": host,
                                              "pooler_host": f"{endpoint_id}-pooler.us-east-2.aws.neon.tech"},
                },
                {
                    "connection_uri": f"postgresql://other:secret@{host}/neondb?sslmode=require",
                    "connection_parameters": {"database": "neondb", "password": "secret",
                                              "role": "other", "host": host},
                },
            ],
        }
        if self.omit_connection_uris:
            created["connection_uris"] = []
        return make_response(201, created, url, "POST")


@pytest.fixture
def fake_api(monkeypatch):
    """Route every HTTP request through a fresh FakeNeonAPI."""
    api = FakeNeonAPI()
    monkeypatch.setattr("neontestdb.utils.api_client.requests.request", api)
    return api


@pytest.fixture
def config():
    """Configuration pointing at the fake project."""
    config = Config()
    config.api_key = "test-key"
    config.project_id = "p1"
    config.parent_branch = "main"
    return config


@pytest.fixture
def sleeps(monkeypatch):
    """Record lock-retry sleeps instead of sleeping."""
    recorded = []
    monkeypatch.setattr("neontestdb.operations.branch_registry.time.sleep", recorded.append)
    return recorded


@pytest.fixture
def client(config, fake_api):
    """Client wired to the fake API, logging nowhere."""
    return Client(config, debug_logger=DebugLogger())


@pytest.fixture
def neon_env(monkeypatch, tmp_path):
    """Credentials in the environment, and a cwd without a .env file."""
    monkeypatch.chdir(tmp_path)
    for key in ("NEON_PARENT_BRANCH", "NEON_NO_CLEANUP", "NEON_API_URL", "NEON_DEBUG",
                "NEON_DEBUG_LOG", "NEON_REQUEST_TIMEOUT"):
        # setenv first so values a .env file loads are undone too
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.setenv("NEON_API_KEY", "test-key")
    monkeypatch.setenv("NEON_PROJECT_ID", "p1")
    return tmp_path
