import logging
from typing import Any, Dict, List, Optional

import requests

from ..core.errors import StoreUnavailable, error_from_response

logger = logging.getLogger(__name__)

RESOURCES = ('blog', 'classes', 'coaches', 'events', 'products')


class AdminApiClient:
    """HTTP client for the admin JSON API, sharing one cookie session"""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        """
        Send one request and return the decoded JSON body

        Raises:
            StoreUnavailable: transport failure or unreadable response
            AdminError subclass: non-2xx response, classified by code/status
        """
        try:
            response = self.session.request(method, self._url(path), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise StoreUnavailable(f"Could not reach the server: {e}")

        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            raise error_from_response(response.status_code, body)
        if body is None:
            raise StoreUnavailable('Server returned an unreadable response')
        return body

    @staticmethod
    def _check_resource(resource: str) -> str:
        if resource not in RESOURCES:
            raise ValueError(f"Unknown resource '{resource}'. Expected one of: {', '.join(RESOURCES)}")
        return resource

    # ===== Auth =====

    def signup(self, name: str, email: str, password: str) -> Dict[str, Any]:
        return self.request('POST', '/api/auth/signup', {'name': name, 'email': email, 'password': password})

    def signin(self, email: str, password: str) -> Dict[str, Any]:
        return self.request('POST', '/api/auth/signin', {'email': email, 'password': password})

    def signout(self) -> Dict[str, Any]:
        return self.request('POST', '/api/auth/signout')

    # ===== Resources =====

    def list(self, resource: str) -> List[Dict[str, Any]]:
        return self.request('GET', f"/api/{self._check_resource(resource)}")

    def get(self, resource: str, record_id: int) -> Dict[str, Any]:
        return self.request('GET', f"/api/{self._check_resource(resource)}/{record_id}")

    def create(self, resource: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.request('POST', f"/api/{self._check_resource(resource)}", payload)

    def update(self, resource: str, record_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.request('PUT', f"/api/{self._check_resource(resource)}/{record_id}", payload)

    def patch_status(self, resource: str, record_id: int, status: str) -> Dict[str, Any]:
        return self.request('PATCH', f"/api/{self._check_resource(resource)}/{record_id}", {'status': status})

    def delete(self, resource: str, record_id: int) -> Dict[str, Any]:
        return self.request('DELETE', f"/api/{self._check_resource(resource)}/{record_id}")
