# synccircle/client/api_client.py

from typing import Any, Dict, List, Optional
import httpx
import logging

logger = logging.getLogger(__name__)

class ApiRequestError(Exception):
    """A request that did not come back 2xx.

    ``status_code`` is 0 when the server could not be reached at all.
    """

    def __init__(self, status_code: int, message: str, error_type: Optional[str] = None,
                 details: Optional[List[str]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_type = error_type
        self.details = details or []

    def __repr__(self):
        return f'<ApiRequestError {self.status_code} {self.error_type}: {self.message}>'


class SyncCircleClient:
    """Blocking JSON client for the SyncCircle API (bearer-token auth)."""

    def __init__(self, base_url: str = "", token: Optional[str] = None, timeout: float = 10.0,
                 http_client: Optional[httpx.Client] = None):
        self.token = token
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self):
        if self._owns_client:
            self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = self._http.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {str(e)}")
            raise ApiRequestError(0, f"Could not reach server: {str(e)}") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            if not isinstance(body, dict):
                body = {}
            raise ApiRequestError(
                response.status_code,
                body.get("error") or response.reason_phrase or "Request failed",
                error_type=body.get("error_type"),
                details=body.get("details"),
            )
        return response.json()

    # Auth
    def login(self, username: str, password: str) -> str:
        data = self._request("POST", "/api/auth/login", {"username": username, "password": password})
        self.token = data["access_token"]
        return self.token

    def logout(self):
        self._request("POST", "/api/auth/logout")
        self.token = None

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/api/auth/me")

    # Forms
    def create_form(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/api/forms", data)

    def get_form(self, form_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/forms/{form_id}")

    def update_form(self, form_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/api/forms/{form_id}", data)

    def get_space_forms(self, space_id: int) -> List[Dict[str, Any]]:
        return self._request("GET", f"/api/spaces/{space_id}/forms")

    # Responses
    def get_my_response(self, form_id: int) -> Optional[Dict[str, Any]]:
        return self._request("GET", f"/api/forms/{form_id}/my-response")

    def has_pending_submission(self, form_id: int) -> bool:
        return self._request("GET", f"/api/forms/{form_id}/pending-submission")["hasPendingSubmission"]

    def get_form_responses(self, form_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/forms/{form_id}/responses")

    def save_response(self, form_id: int, answers: Dict[str, Any], is_draft: bool) -> Dict[str, Any]:
        return self._request("POST", "/api/responses",
                             {"formId": form_id, "answers": answers, "isDraft": is_draft})

    def update_response(self, response_id: int, answers: Dict[str, Any], is_draft: bool) -> Dict[str, Any]:
        return self._request("PUT", f"/api/responses/{response_id}",
                             {"answers": answers, "isDraft": is_draft})

    def get_response(self, response_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/responses/{response_id}")

    # Health
    def ping(self) -> Dict[str, Any]:
        return self._request("GET", "/api/health/ping")
