"""Delete branches left behind by earlier test runs."""

import socket
from neontestdb.operations.base import BaseOperation
from neontestdb.operations.branch_registry import BranchRegistry
from neontestdb.utils.errors import ConfigurationError

class BranchPruner(BaseOperation):
    """Delete every branch whose name starts with a prefix.

    Test branches are named ``<hostname>.<test>``, so the default prefix
    selects the branches this host created. Runs with cleanup disabled, or
    runs killed mid-test, leave those behind.
    """

    def __init__(self, config, auth_manager, api_client=None, progress=None, debug_logger=None,
                 registry=None):
        super().__init__(config, auth_manager, api_client, progress, debug_logger)
        self.registry = registry or BranchRegistry(config, auth_manager, api_client, progress, debug_logger)

    def execute(self, prefix=None):
        """Delete matching branches one at a time.

        The configured parent, the project's default branch and protected
        branches are never deleted.

        Args:
            prefix (str, optional): Name prefix; defaults to ``<hostname>.``

        Returns:
            list: The deleted Branch objects
        """
        if prefix is None:
            prefix = f"{socket.gethostname()}."
        if not prefix:
            raise ConfigurationError("Refusing to prune with an empty prefix")

        branches = self.registry.get_branches()
        if branches is None:
            if self.logger:
                self.logger.log("No branches found; nothing to prune")
            return []

        targets = [
            branch for branch in branches
            if branch.name.startswith(prefix)
            and branch.name != self.config.parent_branch
            and not (branch.default or branch.primary or branch.protected)
        ]

        if self.logger:
            self.logger.log(f"Pruning {len(targets)} of {len(branches)} branches matching '{prefix}'")

        if self.progress:
            self.progress.create_bar(len(targets), "Deleting branches")

        deleted = []
        try:
            for branch in targets:
                self.registry.delete_branch(branch.id)
                deleted.append(branch)
                if self.progress:
                    self.progress.update(1, current=branch.name[:30])
        finally:
            if self.progress:
                self.progress.close()

        return deleted
