"""Configuration for the Operous API client and polling."""

from pydantic import BaseModel, Field, SecretStr

DEFAULT_API_URL = "https://app.operous.dev/graphql"


class OperousConfig(BaseModel):
    """Configuration for talking to Operous and tracking test runs."""

    token: SecretStr
    api_url: str = DEFAULT_API_URL
    poll_interval: float = Field(default=5, gt=0)
    # None keeps polling until Operous reports a terminal status
    timeout: float | None = Field(default=None, gt=0)
