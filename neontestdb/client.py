"""Entry point for tests: a configured client for the project's branches."""

from neontestdb.utils.auth import AuthManager
from neontestdb.utils.config import Config
from neontestdb.utils.api_client import APIClient
from neontestdb.utils.debug_logger import DebugLogger
from neontestdb.utils.errors import ConfigurationError
from neontestdb.operations.branch_registry import BranchRegistry
from neontestdb.operations.branch_lifecycle import BranchLifecycle
from neontestdb.operations.branch_pruner import BranchPruner

class Client:
    """Branch client bound to one project and one parent branch.

    Holds no mutable state of its own, so one instance can serve a whole
    test session, including tests running in parallel threads.
    """

    def __init__(self, config, debug_logger=None, progress=None):
        """Initialize the client.

        Args:
            config (Config): Configuration instance
            debug_logger (DebugLogger, optional): Defaults to one built from the config
            progress (ProgressTracker, optional): Progress display for pruning
        """
        self.config = config
        self.logger = debug_logger or DebugLogger(config.debug_log, console_debug=config.debug)
        self.auth = AuthManager(config.api_key)
        self.api_client = APIClient(config.base_url, self.auth, config, self.logger)
        self.registry = BranchRegistry(config, self.auth, self.api_client, debug_logger=self.logger)
        self.lifecycle = BranchLifecycle(config, self.auth, self.api_client, debug_logger=self.logger,
                                         registry=self.registry)
        self.pruner = BranchPruner(config, self.auth, self.api_client, progress, self.logger,
                                   registry=self.registry)

    def get_branches(self):
        return self.registry.get_branches()

    def get_branch(self, branch_id):
        return self.registry.get_branch(branch_id)

    def get_branch_by_name(self, name):
        return self.registry.get_branch_by_name(name)

    def create_branch(self, name):
        return self.registry.create_branch(name)

    def delete_branch(self, branch_id):
        self.registry.delete_branch(branch_id)

    def forced_create_branch(self, name):
        return self.lifecycle.forced_create_branch(name)

    def branch(self, name):
        """Context manager yielding the ConnectionURI of a fresh branch."""
        return self.lifecycle.branch(name)

    def using_branch(self, name, callback):
        return self.lifecycle.using_branch(name, callback)

    def using_test_branch(self, test, callback, hostname=None):
        return self.lifecycle.using_test_branch(test, callback, hostname)

    def prune_branches(self, prefix=None):
        return self.pruner.execute(prefix)

    def __repr__(self):
        return f"Client(project={self.config.project_id}, parent={self.config.parent_branch})"

def load_client(env_file='.env', **overrides):
    """Build a client from the environment (and ``.env``, if present).

    Args:
        env_file (str): Path to environment file (default: '.env')
        **overrides: Config attributes to set after loading, e.g. ``no_cleanup=True``

    Returns:
        Client: A client ready to use

    Raises:
        ConfigurationError: If NEON_API_KEY or NEON_PROJECT_ID is missing
    """
    config = Config.from_env(env_file)

    for key, value in overrides.items():
        if not hasattr(config, key):
            raise TypeError(f"Unknown config option: {key}")
        setattr(config, key, value)

    is_valid, error = config.validate()
    if not is_valid:
        raise ConfigurationError(error)

    return Client(config)
