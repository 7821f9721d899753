# =============================================================================
# core/client.py  -  The watsonx.ai upstream client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to the IBM watsonx.ai REST API.  The dispatcher only ever sees the
#   `WatsonxClient` protocol below (three methods), so tests can hand it an
#   in-memory fake instead of a real network client.
#
# AUTHENTICATION:
#   watsonx.ai does not accept the API key directly.  The key is exchanged at
#   IBM Cloud IAM for a bearer token, which expires after about an hour.  The
#   token is cached and refreshed 60 seconds before it expires.
#
# RETURN VALUES:
#   Every method returns the decoded JSON body as a plain dict.  No reshaping
#   happens here; that is the dispatcher's job.
#
# ERRORS:
#   Non-2xx responses raise WatsonxAPIError carrying the service's own error
#   message.  Network problems surface as requests.RequestException.  Nothing
#   is retried.
# =============================================================================

import logging
import threading
import time
from typing import Any, Optional, Protocol

import requests

from core.config import API_VERSION, DEFAULT_SERVICE_URL


logger = logging.getLogger(__name__)

IAM_TOKEN_URL = "https://iam.cloud.ibm.com/identity/token"
IAM_GRANT_TYPE = "urn:ibm:params:oauth:grant-type:apikey"
TOKEN_REFRESH_MARGIN_SECONDS = 60


class WatsonxClient(Protocol):
    """The three upstream capabilities the dispatcher needs."""

    def generate_text(self, params: dict[str, Any]) -> dict[str, Any]:
        ...

    def list_foundation_model_specs(self, limit: int) -> dict[str, Any]:
        ...

    def embed_text(self, params: dict[str, Any]) -> dict[str, Any]:
        ...


class WatsonxAPIError(Exception):
    """A non-2xx answer from watsonx.ai or IAM."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: requests.Response) -> "WatsonxAPIError":
        return cls(_error_message(response), status_code=response.status_code)


def _error_message(response: requests.Response) -> str:
    """Pull the human-readable message out of an error body.

    watsonx.ai answers `{"errors": [{"code": ..., "message": ...}], ...}`;
    IAM answers `{"errorCode": ..., "errorMessage": ...}`.  Anything else
    falls back to the HTTP status line.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            if message:
                return str(message)
        if body.get("errorMessage"):
            return str(body["errorMessage"])

    reason = response.reason or "Error"
    return f"{response.status_code} {reason}"


class RestWatsonxClient:
    """watsonx.ai over plain HTTPS with `requests`."""

    def __init__(
        self,
        api_key: str,
        service_url: str = DEFAULT_SERVICE_URL,
        version: str = API_VERSION,
        session: Optional[requests.Session] = None,
        iam_url: str = IAM_TOKEN_URL,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.service_url = service_url.rstrip("/")
        self.version = version
        self.iam_url = iam_url
        self.session = session or requests.Session()

        self._token: Optional[str] = None
        self._token_expires_at = 0.0
        self._token_lock = threading.Lock()

    # ---------- Public API ----------

    def generate_text(self, params: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/ml/v1/text/generation", json=params)

    def list_foundation_model_specs(self, limit: int) -> dict[str, Any]:
        return self._request(
            "GET", "/ml/v1/foundation_model_specs", params={"limit": limit}
        )

    def embed_text(self, params: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/ml/v1/text/embeddings", json=params)

    # ---------- Internals ----------

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        query = {"version": self.version}
        if params:
            query.update(params)

        response = self.session.request(
            method,
            f"{self.service_url}{path}",
            params=query,
            json=json,
            headers={
                "Authorization": f"Bearer {self._access_token()}",
                "Accept": "application/json",
            },
        )
        logger.debug("%s %s -> %s", method, path, response.status_code)
        if not response.ok:
            raise WatsonxAPIError.from_response(response)
        return response.json()

    def _access_token(self) -> str:
        with self._token_lock:
            now = time.time()
            if self._token and now < self._token_expires_at - TOKEN_REFRESH_MARGIN_SECONDS:
                return self._token

            response = self.session.post(
                self.iam_url,
                data={"grant_type": IAM_GRANT_TYPE, "apikey": self.api_key},
                headers={
                    "Content-Type": "application/x-www-form-urlencoded",
                    "Accept": "application/json",
                },
            )
            if not response.ok:
                raise WatsonxAPIError.from_response(response)

            body = response.json()
            self._token = body["access_token"]
            # IAM sends both; `expiration` is an absolute epoch timestamp.
            self._token_expires_at = float(
                body.get("expiration") or now + float(body.get("expires_in", 3600))
            )
            logger.info("Obtained IAM access token")
            return self._token
