"""Client configuration.

Transport settings are read through pydantic-settings so that URLs and
timeouts can be overridden from the environment (``TWITCH_API_*``) or a
``.env`` file.  Credentials are never read from the environment; they are
passed in by the caller or loaded from an explicit credentials file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api.twitch.tv/helix"
DEFAULT_AUTH_URL = "https://id.twitch.tv/oauth2/token"


class ClientSettings(BaseSettings):
    """Settings for the shared HTTP transport."""

    model_config = SettingsConfigDict(
        env_prefix="TWITCH_API_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        min_length=8,
        description="Base URL of the Helix REST API.",
    )
    auth_url: str = Field(
        default=DEFAULT_AUTH_URL,
        min_length=8,
        description="OAuth token endpoint used for the client credentials grant.",
    )
    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="twitch-api-client/0.3",
        min_length=1,
        description="User-Agent sent with every request.",
    )


class Credentials(BaseModel):
    """Application credentials as stored in a JSON credentials file.

    Both ``client_id`` and ``client_secret`` must be present in the file.
    ``note`` is a reminder for whoever fills the file in; :meth:`dump`
    leaves it out when it is empty.
    """

    note: Optional[str] = None
    client_id: str
    client_secret: str = Field(repr=False)

    @classmethod
    def template(cls) -> "Credentials":
        """Placeholder credentials to write out for the user to fill in."""
        return cls(
            note="Get these from https://dev.twitch.tv/console/apps",
            client_id="Client ID",
            client_secret="Client Secret",
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Credentials":
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    def dump(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(exclude={"note"} if not self.note else None)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return path
