# =============================================================================
# core/config.py  -  Settings read from the environment
# =============================================================================
#
# Three values, read once when the server starts:
#
#   WATSONX_API_KEY     IBM Cloud API key.  Without it every tool call answers
#                       with the "not configured" message.
#   WATSONX_PROJECT_ID  Optional.  Sent as `project_id` on generation and
#                       embedding requests when set, omitted entirely when not.
#   WATSONX_URL         Regional service endpoint.
#
# `.env` files are loaded by the server entry point (tools/mcp_server.py)
# with python-dotenv before these settings are built.
# =============================================================================

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_SERVICE_URL = "https://us-south.ml.cloud.ibm.com"
API_VERSION = "2024-05-31"


@dataclass(frozen=True)
class WatsonxSettings:
    api_key: Optional[str] = None
    project_id: Optional[str] = None
    service_url: str = DEFAULT_SERVICE_URL
    version: str = API_VERSION

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WatsonxSettings":
        """Build settings from `environ` (defaults to os.environ).

        Empty strings count as unset, so `WATSONX_PROJECT_ID=` in a .env file
        does not send an empty project id.
        """
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get("WATSONX_API_KEY") or None,
            project_id=env.get("WATSONX_PROJECT_ID") or None,
            service_url=env.get("WATSONX_URL") or DEFAULT_SERVICE_URL,
        )

    def __repr__(self) -> str:
        # Never print the key itself (this ends up in logs).
        key = "set" if self.api_key else "unset"
        return (
            f"WatsonxSettings(api_key={key}, project_id={self.project_id!r}, "
            f"service_url={self.service_url!r}, version={self.version!r})"
        )
