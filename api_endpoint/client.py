"""HTTP client for a service exposing a request-aware API description.

Provides simple methods to fetch the /__api document and /__build-info.
Raises `requests.exceptions.HTTPError` for non-2xx responses and
`requests.exceptions.Timeout` if a request times out.

Usage:
    client = APIEndpointClient("http://localhost:8080")
    client.get_api()
    client.get_api(forwarded_url="https://api.example.com/__my-service/__api")
"""
import requests
import yaml
from typing import Optional, Dict, Any
from urllib.parse import urljoin

from api_endpoint.endpoint import DEFAULT_API_PATH
from api_endpoint.rewrite import DEFAULT_FORWARDED_URL_HEADER
from api_endpoint.schemas import BuildInfo

class APIEndpointClient:
    """
    HTTP client for the /__api and /__build-info endpoints.

    Raises:
        requests.exceptions.HTTPError: for any non-2xx HTTP response
        requests.exceptions.Timeout: if a request exceeds the timeout

    Examples:
        >>> client = APIEndpointClient("http://localhost:8080", timeout=5)
        >>> client.get_api()["basePath"]
        '/'
        >>> client.get_build_info().version
        'In development'
    """
    def __init__(self, base_url: str, timeout: int = 10, header_name: str = DEFAULT_FORWARDED_URL_HEADER):
        """
        Initialize the client.

        Args:
            base_url: The base URL of the service (e.g., 'http://localhost:8080'). A trailing slash will be stripped.
            timeout: Request timeout in seconds.
            header_name: Forwarding header to send when a forwarded URL is given.
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.header_name = header_name

    def get_raw_api(self, forwarded_url: Optional[str] = None, path: str = DEFAULT_API_PATH) -> bytes:
        """
        Fetch the API description bytes exactly as served.

        Args:
            forwarded_url: Value for the forwarding header, simulating a proxy. Not sent when None.
            path: Path the description is mounted at.

        Raises:
            requests.exceptions.HTTPError: on non-2xx HTTP response.
            requests.exceptions.Timeout: if the request times out.
        """
        headers = {}
        if forwarded_url is not None:
            headers[self.header_name] = forwarded_url
        url = urljoin(self.base_url + '/', path.lstrip('/'))
        resp = requests.get(url, headers=headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.content

    def get_api(self, forwarded_url: Optional[str] = None, path: str = DEFAULT_API_PATH) -> Dict[Any, Any]:
        """Fetch the API description and decode it from YAML."""
        return yaml.safe_load(self.get_raw_api(forwarded_url, path))

    def get_build_info(self) -> BuildInfo:
        """
        Fetch /__build-info.

        Raises:
            requests.exceptions.HTTPError: on non-2xx HTTP response.
            requests.exceptions.Timeout: if the request times out.
        """
        url = urljoin(self.base_url + '/', '__build-info')
        resp = requests.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return BuildInfo.model_validate(resp.json())
