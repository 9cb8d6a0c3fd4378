"""Branch CRUD against the Neon API."""

import time
from neontestdb.operations.base import BaseOperation
from neontestdb.models.branch import Branch, Branches
from neontestdb.models.branch_created import BranchCreated, CreateBranchRequest
from neontestdb.utils.errors import BranchLockedError, ParentBranchNotFoundError

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NOT_FOUND = 404
HTTP_LOCKED = 423

class BranchRegistry(BaseOperation):
    """Get, list, create and delete branches of the configured project.

    Branch IDs (``br-...``) address a branch in the API path; display names
    are only resolved through ``get_branch_by_name``. Nothing is cached, every
    call goes to the service.
    """

    def get_branches(self):
        """List all branches in the project.

        Returns:
            Branches: The listing, or None if the project was not found
        """
        response = self.api_client.get(self.branches_endpoint())

        if response.status_code == HTTP_NOT_FOUND:
            return None

        self.api_client.validate_status(response, HTTP_OK)
        return self.api_client.parse(response, Branches)

    def get_branch(self, branch_id):
        """Fetch one branch by ID.

        Args:
            branch_id (str): The branch ID

        Returns:
            Branch: The branch, or None if it does not exist
        """
        response = self.api_client.get(self.branch_endpoint(branch_id))

        if response.status_code == HTTP_NOT_FOUND:
            return None

        self.api_client.validate_status(response, HTTP_OK)
        return self.api_client.parse(response, Branch)

    def get_branch_by_name(self, name):
        """Find a branch by its display name.

        Args:
            name (str): The branch name

        Returns:
            Branch: The first branch with that name, or None
        """
        branches = self.get_branches()
        if branches is None:
            return None
        return branches.find_by_name(name)

    def create_branch(self, name):
        """Create a branch off the configured parent branch.

        The service answers 423 Locked while another operation holds the
        project lock; those attempts are retried after a short, growing delay.

        Args:
            name (str): Name for the new branch

        Returns:
            BranchCreated: The branch with its endpoints and connection URIs

        Raises:
            ParentBranchNotFoundError: If the parent branch does not exist
            BranchLockedError: If the lock did not clear within the retry window
        """
        parent = self.get_branch_by_name(self.config.parent_branch)
        if parent is None:
            if self.logger:
                self.logger.log(f"ERROR: parent branch '{self.config.parent_branch}' not found")
            raise ParentBranchNotFoundError(name, self.config.parent_branch)

        request = CreateBranchRequest(name=name, parent_id=parent.id)

        start = time.monotonic()
        for attempt, delay in enumerate(self.config.lock_retry_delays(), 1):
            response = self.api_client.post(self.branches_endpoint(), json_data=request.to_dict())

            if response.status_code == HTTP_LOCKED:
                if self.logger:
                    self.logger.log(f"  Branch {name} locked (attempt {attempt}). Retrying in {delay * 1000:.0f}ms...")
                time.sleep(delay)
                continue

            self.api_client.validate_status(response, HTTP_OK, HTTP_CREATED)
            created = self.api_client.parse(response, BranchCreated)

            if self.logger:
                self.logger.log(f"Created branch {created.branch.name} ({created.branch.id}) from {parent.name}")
                for operation in created.operations:
                    self.logger.log(f"  - Operation {operation.action}: {operation.status}")

            return created

        elapsed = time.monotonic() - start
        if self.logger:
            self.logger.log(f"ERROR: branch {name} still locked after {elapsed:.3f}s")
        raise BranchLockedError(name, elapsed)

    def delete_branch(self, branch_id):
        """Delete a branch by ID.

        Args:
            branch_id (str): The branch ID
        """
        response = self.api_client.delete(self.branch_endpoint(branch_id))
        self.api_client.validate_status(response, HTTP_OK)

        if self.logger:
            self.logger.log(f"Deleted branch {branch_id}")
