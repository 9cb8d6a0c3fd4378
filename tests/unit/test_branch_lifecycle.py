"""Tests for force-create, scoped branch use and test branch naming."""

import types

import pytest

from neontestdb.operations.branch_lifecycle import branch_name_for_test, describe_test
from neontestdb.utils.errors import ConfigurationError, MissingConnectionURIError, NeonTestDBError


class TestForcedCreateBranch:
    """Test create-or-replace."""

    def test_created_branch_is_readable(self, client, fake_api):
        """Test that the new branch is visible with the parent's ID."""
        created = client.forced_create_branch("fresh")

        branch = client.get_branch(created.branch.id)
        assert branch.name == "fresh"
        assert branch.parent_id == client.get_branch_by_name("main").id

    def test_twice_replaces_first(self, client, fake_api):
        """Test that a second call deletes the first branch instead of conflicting."""
        first = client.forced_create_branch("twice")
        second = client.forced_create_branch("twice")

        assert first.branch.id != second.branch.id
        assert client.get_branch(first.branch.id) is None
        assert client.get_branch_by_name("twice").id == second.branch.id

    def test_refuses_parent_name(self, client, fake_api):
        """Test that the parent branch is never replaced."""
        with pytest.raises(ConfigurationError, match="main"):
            client.forced_create_branch("main")

        assert fake_api.by_name("main") is not None
        assert [call["method"] for call in fake_api.calls] == []

    def test_parent_refusal_is_library_error(self, client, config):
        """Test that a renamed parent is guarded and callers can catch the base error."""
        config.parent_branch = "staging"

        with pytest.raises(NeonTestDBError):
            client.using_branch("staging", lambda uri: None)


class TestUsingBranch:
    """Test scoped branch use."""

    def test_callback_gets_first_uri(self, client):
        """Test that the callback receives the first connection URI."""
        seen = []

        client.using_branch("scoped", seen.append)

        assert len(seen) == 1
        assert seen[0].role == "neondb_owner"
        assert seen[0].connection_uri.startswith("postgresql://neondb_owner:")

    def test_returns_callback_result(self, client):
        """Test that the callback's return value is passed through."""
        assert client.using_branch("scoped", lambda uri: uri.database) == "neondb"

    def test_cleans_up(self, client):
        """Test that the branch is gone after the callback returns."""
        client.using_branch("scoped", lambda uri: None)

        assert client.get_branch_by_name("scoped") is None

    def test_branch_exists_during_callback(self, client):
        """Test that the branch is live while the callback runs."""
        states = []

        client.using_branch("scoped", lambda uri: states.append(client.get_branch_by_name("scoped")))

        assert states[0] is not None

    def test_no_cleanup_keeps_branch(self, client, config):
        """Test that suppressed cleanup leaves the branch in place."""
        config.no_cleanup = True

        client.using_branch("kept", lambda uri: None)

        assert client.get_branch_by_name("kept") is not None

    def test_cleans_up_when_callback_raises(self, client):
        """Test that an exception escaping the callback still deletes the branch."""
        def failing(uri):
            raise AssertionError("test body failed")

        with pytest.raises(AssertionError, match="test body failed"):
            client.using_branch("failing", failing)

        assert client.get_branch_by_name("failing") is None

    def test_context_manager(self, client):
        """Test the with-statement form."""
        with client.branch("ctx") as uri:
            assert uri.host.endswith(".neon.tech")
            assert client.get_branch_by_name("ctx") is not None

        assert client.get_branch_by_name("ctx") is None

    def test_cleans_up_without_connection_uri(self, client, fake_api):
        """Test that a branch created without a URI is still deleted."""
        fake_api.omit_connection_uris = True
        calls = []

        with pytest.raises(MissingConnectionURIError, match="no-uri"):
            client.using_branch("no-uri", calls.append)

        assert calls == []
        assert fake_api.by_name("no-uri") is None


class TestTestBranchNames:
    """Test deriving branch names from tests."""

    def test_scenario(self):
        """Test host h1 with a test and a sub-test."""
        assert branch_name_for_test("TestFoo", hostname="h1") == "h1.TestFoo"
        assert branch_name_for_test("TestFoo/case1", hostname="h1") == "h1.TestFoo.case1"

    def test_deterministic_without_slashes(self, monkeypatch):
        """Test that the local hostname is used and the result is stable."""
        monkeypatch.setattr("neontestdb.operations.branch_lifecycle.socket.gethostname", lambda: "ci-runner")

        first = branch_name_for_test("TestA/sub/deeper")
        second = branch_name_for_test("TestA/sub/deeper")

        assert first == second == "ci-runner.TestA.sub.deeper"
        assert "/" not in first

    def test_describe_string(self):
        """Test that plain names pass through."""
        assert describe_test("TestFoo/case1") == "TestFoo/case1"

    def test_describe_pytest_request(self):
        """Test naming from a pytest request for a method in a class."""
        class TestSuite:
            pass

        request = types.SimpleNamespace(node=types.SimpleNamespace(cls=TestSuite, name="test_it[pg16]"))

        assert describe_test(request) == "TestSuite/test_it[pg16]"

    def test_describe_this_request(self, request):
        """Test naming from this very test's request."""
        assert describe_test(request) == "test_branch_lifecycle/TestTestBranchNames/test_describe_this_request"

    def test_describe_includes_module(self):
        """Test that same-named tests in different modules get different names."""
        first = types.SimpleNamespace(path="tests/test_users.py", cls=None, name="test_create")
        second = types.SimpleNamespace(path="tests/test_orders.py", cls=None, name="test_create")

        assert describe_test(first) == "test_users/test_create"
        assert describe_test(second) == "test_orders/test_create"
        assert branch_name_for_test(describe_test(first), "h1") != branch_name_for_test(describe_test(second), "h1")


class TestUsingTestBranch:
    """Test the test-named entry point."""

    def test_uses_derived_name(self, client, fake_api):
        """Test that the branch is named after host and test, then cleaned up."""
        names = []

        client.using_test_branch(
            "TestFoo/case1",
            lambda uri: names.extend(branch["name"] for branch in fake_api.branches.values()),
            hostname="h1",
        )

        assert "h1.TestFoo.case1" in names
        assert fake_api.by_name("h1.TestFoo.case1") is None

    def test_repeated_runs_reuse_name(self, client, fake_api, config):
        """Test that a leftover branch from an earlier run is replaced."""
        config.no_cleanup = True

        client.using_test_branch("TestFoo", lambda uri: None, hostname="h1")
        client.using_test_branch("TestFoo", lambda uri: None, hostname="h1")

        assert [branch["name"] for branch in fake_api.branches.values()].count("h1.TestFoo") == 1
