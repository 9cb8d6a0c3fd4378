from urllib.parse import quote

class BaseOperation:
    """Shared wiring for anything that talks to the branch API."""

    def __init__(self, config, auth_manager, api_client=None, progress=None, debug_logger=None):
        """Initialize the operation.

        Args:
            config (Config): Configuration instance
            auth_manager (AuthManager): Authentication manager instance
            api_client (APIClient, optional): API client instance
            progress (ProgressTracker, optional): Progress tracker instance
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.config = config
        self.auth = auth_manager
        self.api_client = api_client
        self.progress = progress
        self.logger = debug_logger

    def branches_endpoint(self):
        """API path of the project's branch collection."""
        return f"/projects/{quote(self.config.project_id, safe='')}/branches"

    def branch_endpoint(self, branch_id):
        """API path of a single branch."""
        return f"{self.branches_endpoint()}/{quote(branch_id, safe='')}"
