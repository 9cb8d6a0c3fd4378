"""pytest fixtures: one fresh branch per test."""

import pytest
from neontestdb.client import load_client
from neontestdb.operations.branch_lifecycle import branch_name_for_test, describe_test
from neontestdb.utils.errors import ConfigurationError

def pytest_addoption(parser):
    group = parser.getgroup("neontestdb", "Neon test branches")
    group.addoption(
        "--neon-keep-branches",
        action="store_true",
        default=False,
        help="Keep test branches after each test instead of deleting them",
    )
    group.addoption(
        "--neon-env-file",
        default=".env",
        help="Environment file holding NEON_API_KEY and NEON_PROJECT_ID (default: .env)",
    )

@pytest.fixture(scope="session")
def neon_client(request):
    """Client for the configured project; skips the test when credentials are missing."""
    overrides = {}
    if request.config.getoption("neon_keep_branches"):
        overrides['no_cleanup'] = True

    try:
        client = load_client(request.config.getoption("neon_env_file"), **overrides)
    except ConfigurationError as e:
        pytest.skip(str(e))

    yield client
    client.logger.close()

@pytest.fixture
def neon_branch(request, neon_client):
    """ConnectionURI of a branch named ``<hostname>.<module>.<test>``, deleted after the test."""
    name = branch_name_for_test(describe_test(request))
    with neon_client.branch(name) as uri:
        yield uri
