"""Short-lived branches for tests: force-create, use, clean up."""

import socket
from pathlib import Path
from contextlib import contextmanager
from neontestdb.operations.base import BaseOperation
from neontestdb.operations.branch_registry import BranchRegistry
from neontestdb.utils.errors import ConfigurationError

def describe_test(test):
    """Name a test the way the branch name derivation expects.

    Args:
        test: A test name string, or a pytest request or node

    Returns:
        str: ``module/Class/function`` style name, sub-tests separated by ``/``
    """
    if isinstance(test, str):
        return test

    node = getattr(test, 'node', test)
    parts = []
    path = getattr(node, 'path', None)
    if path is not None:
        parts.append(Path(path).stem)
    cls = getattr(node, 'cls', None)
    if cls is not None:
        parts.append(cls.__name__)
    parts.append(node.name)
    return '/'.join(parts)

def branch_name_for_test(test_name, hostname=None):
    """Derive the branch name for a test run on this host.

    ``h1`` and ``TestFoo/case1`` give ``h1.TestFoo.case1``.

    Args:
        test_name (str): The test name, sub-tests separated by ``/``
        hostname (str, optional): Defaults to the local hostname
    """
    if hostname is None:
        hostname = socket.gethostname()
    return f"{hostname}.{test_name}".replace('/', '.')

class BranchLifecycle(BaseOperation):
    """Create a fresh branch, hand out its connection URI, delete it afterwards."""

    def __init__(self, config, auth_manager, api_client=None, progress=None, debug_logger=None,
                 registry=None):
        super().__init__(config, auth_manager, api_client, progress, debug_logger)
        self.registry = registry or BranchRegistry(config, auth_manager, api_client, progress, debug_logger)

    def forced_create_branch(self, name):
        """Create a branch, deleting any existing branch with the same name first.

        Args:
            name (str): Branch name

        Returns:
            BranchCreated: The freshly created branch
        """
        if name == self.config.parent_branch:
            raise ConfigurationError(f"Refusing to replace the parent branch '{name}'")

        existing = self.registry.get_branch_by_name(name)
        if existing is not None:
            if self.logger:
                self.logger.log(f"Deleting stale branch {name} ({existing.id})")
            self.registry.delete_branch(existing.id)

        return self.registry.create_branch(name)

    @contextmanager
    def branch(self, name):
        """Context manager yielding the connection URI of a fresh branch.

        The branch is deleted on every exit path, exceptions included,
        unless cleanup is disabled in the config.

        Args:
            name (str): Branch name
        """
        created = self.forced_create_branch(name)
        try:
            yield created.connection_uri
        finally:
            if self.config.no_cleanup:
                if self.logger:
                    self.logger.log(f"Keeping branch {name} ({created.branch.id})")
            else:
                self.registry.delete_branch(created.branch.id)

    def using_branch(self, name, callback):
        """Run ``callback`` against a fresh branch.

        Args:
            name (str): Branch name
            callback (callable): Called with the branch's ConnectionURI

        Returns:
            Whatever ``callback`` returns
        """
        with self.branch(name) as uri:
            return callback(uri)

    def using_test_branch(self, test, callback, hostname=None):
        """Run ``callback`` against a branch named after the current test.

        Args:
            test: Test name string, or a pytest request or node
            callback (callable): Called with the branch's ConnectionURI
            hostname (str, optional): Defaults to the local hostname
        """
        name = branch_name_for_test(describe_test(test), hostname)
        return self.using_branch(name, callback)
