"""API client for the Neon control plane."""

import inspect
import requests
from neontestdb.utils.errors import TransportError, ResponseDecodeError, UnexpectedStatusError

def caller_name():
    """Qualified name of the first function on the stack outside this module."""
    frame = inspect.currentframe().f_back
    try:
        while frame is not None and frame.f_globals.get('__name__') == __name__:
            frame = frame.f_back
        if frame is None:
            return '<unknown>'
        code = frame.f_code
        return f"{frame.f_globals.get('__name__')}.{getattr(code, 'co_qualname', code.co_name)}"
    finally:
        del frame

class APIClient:
    """HTTP client for the Neon API.

    Failures are not retried here: a request that cannot be sent, a status
    outside the accepted set and an undecodable body all raise.
    """

    def __init__(self, base_url, auth_manager, config, debug_logger=None):
        """Initialize the API client.

        Args:
            base_url (str): The base URL for API requests
            auth_manager (AuthManager): Authentication manager instance
            config (Config): Configuration instance
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.base_url = base_url.rstrip('/')
        self.auth = auth_manager
        self.config = config
        self.logger = debug_logger

    def url(self, endpoint):
        """Absolute URL for an API endpoint path."""
        return f"{self.base_url}{endpoint}"

    def request(self, method, endpoint, json_data=None):
        """Send an authenticated request.

        Args:
            method (str): HTTP method
            endpoint (str): API endpoint path
            json_data (dict, optional): JSON body

        Returns:
            requests.Response: The response, whatever its status

        Raises:
            TransportError: If the request could not be completed
        """
        url = self.url(endpoint)
        headers = self.auth.get_headers(with_body=json_data is not None)

        try:
            response = requests.request(
                method,
                url,
                headers=headers,
                json=json_data,
                timeout=self.config.request_timeout
            )
        except requests.exceptions.RequestException as e:
            caller = caller_name()
            if self.logger:
                self.logger.log(f"ERROR: {method} {url} failed in {caller}: {e}")
            raise TransportError(caller, e) from e

        if self.logger:
            self.logger.log(f"{method} {url} -> {response.status_code}")

        return response

    def get(self, endpoint):
        """Make a GET request."""
        return self.request('GET', endpoint)

    def post(self, endpoint, json_data=None):
        """Make a POST request with a JSON body."""
        return self.request('POST', endpoint, json_data=json_data if json_data is not None else {})

    def delete(self, endpoint):
        """Make a DELETE request."""
        return self.request('DELETE', endpoint)

    def validate_status(self, response, *accepted_status):
        """Check the response status against the accepted codes.

        Args:
            response (requests.Response): The response to check
            *accepted_status (int): Acceptable status codes

        Raises:
            UnexpectedStatusError: If the status is not accepted
        """
        if response.status_code not in accepted_status:
            raise UnexpectedStatusError(caller_name(), response.status_code, response.url, response.text)

    def parse(self, response, model_cls):
        """Decode a JSON response into a model.

        Args:
            response (requests.Response): The response to decode
            model_cls (type): Model class providing ``from_dict``

        Raises:
            ResponseDecodeError: If the body is not JSON or lacks required fields
        """
        try:
            return model_cls.from_dict(response.json())
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            caller = caller_name()
            if self.logger:
                self.logger.log(f"ERROR: decoding {model_cls.__name__} in {caller}: {e}")
            raise ResponseDecodeError(caller, model_cls.__name__, response.url, response.text) from e
