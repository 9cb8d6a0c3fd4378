import os
from dotenv import load_dotenv
from neontestdb.utils.errors import ConfigurationError

TRUE_VALUES = ('1', 'true', 'yes', 'on')

class Config:
    def __init__(self):
        """Initialize configuration with default values."""
        # Authentication
        self.base_url = "https://console.neon.tech/api/v2"
        self.api_key = None
        self.project_id = None

        # Branching
        self.parent_branch = "main"
        self.no_cleanup = False

        # General
        self.debug = False
        self.debug_log = None

        # API settings
        self.request_timeout = 60

        # Lock retry: delays grow by lock_retry_step while they stay <= lock_retry_max
        self.lock_retry_initial = 0.01
        self.lock_retry_step = 0.01
        self.lock_retry_max = 0.1

    @classmethod
    def from_args(cls, args, config=None):
        """Create configuration from command line arguments.

        Args:
            args: Parsed command line arguments
            config (Config, optional): Existing configuration to override
        """
        config = config or cls()

        if getattr(args, 'base_url', None):
            config.base_url = args.base_url
        if getattr(args, 'api_key', None):
            config.api_key = args.api_key
        if getattr(args, 'project_id', None):
            config.project_id = args.project_id
        if getattr(args, 'parent_branch', None):
            config.parent_branch = args.parent_branch
        if getattr(args, 'debug', False):
            config.debug = True
        if getattr(args, 'debug_log', None):
            config.debug_log = args.debug_log

        return config

    @classmethod
    def from_env(cls, env_file='.env'):
        """Create configuration from environment variables.

        Args:
            env_file (str): Path to environment file (default: '.env')
        """
        load_dotenv(env_file)  # Load specified .env file if it exists

        config = cls()
        config.api_key = os.getenv('NEON_API_KEY')
        config.project_id = os.getenv('NEON_PROJECT_ID')
        config.no_cleanup = os.getenv('NEON_NO_CLEANUP', '').lower() in TRUE_VALUES
        config.debug = os.getenv('NEON_DEBUG', '').lower() in TRUE_VALUES

        # Optional environment overrides
        if os.getenv('NEON_PARENT_BRANCH'):
            config.parent_branch = os.getenv('NEON_PARENT_BRANCH')
        if os.getenv('NEON_API_URL'):
            config.base_url = os.getenv('NEON_API_URL').rstrip('/')
        if os.getenv('NEON_DEBUG_LOG'):
            config.debug_log = os.getenv('NEON_DEBUG_LOG')
        if os.getenv('NEON_REQUEST_TIMEOUT'):
            try:
                config.request_timeout = float(os.getenv('NEON_REQUEST_TIMEOUT'))
            except ValueError as e:
                raise ConfigurationError(
                    f"NEON_REQUEST_TIMEOUT must be a number of seconds, got {os.getenv('NEON_REQUEST_TIMEOUT')!r}"
                ) from e

        return config

    def validate(self):
        """Validate the configuration.

        Returns:
            tuple: (bool, str) - (is_valid, error_message)
        """
        if not self.api_key:
            return False, "missing required environment variable: NEON_API_KEY"
        if not self.project_id:
            return False, "missing required environment variable: NEON_PROJECT_ID"
        if not self.parent_branch:
            return False, "Parent branch name is required"
        return True, None

    def lock_retry_delays(self):
        """Delays (in seconds) to sleep between locked create attempts."""
        if self.lock_retry_step <= 0:
            return [self.lock_retry_initial]
        delays = []
        delay = self.lock_retry_initial
        # 1e-9 absorbs float accumulation on the last step
        while delay <= self.lock_retry_max + 1e-9:
            delays.append(delay)
            delay += self.lock_retry_step
        return delays
