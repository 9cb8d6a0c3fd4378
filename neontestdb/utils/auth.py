class AuthManager:
    def __init__(self, api_key):
        """Initialize the authentication manager.

        Args:
            api_key (str): The Neon API key, sent as a bearer token
        """
        self.api_key = api_key

    def get_headers(self, with_body=False):
        """Get headers with the bearer token for API requests.

        Args:
            with_body (bool): Add a JSON Content-Type for requests with a body
        """
        headers = {
            'Accept': 'application/json',
            'Authorization': f'Bearer {self.api_key}'
        }
        if with_body:
            headers['Content-Type'] = 'application/json'
        return headers
