"""
Gmail Connection Use Case DTOs
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field

GMAIL_OAUTH_STATE_KEY = "gmail_oauth_state"
GMAIL_CREDENTIAL_KEYS = (
    "gmail_client_id",
    "gmail_client_secret",
    "gmail_refresh_token",
    "gmail_connected_email",
    "gmail_connected_at",
)


class StartGmailOAuthCommand(BaseModel):
    client_id: str = Field(..., min_length=1)
    client_secret: str = Field(..., min_length=1)


class GmailAuthResponse(BaseModel):
    success: bool = True
    auth_url: str


class GmailConnectedResponse(BaseModel):
    connected_email: str


class GmailStatusResponse(BaseModel):
    is_connected: bool
    connected_email: Optional[str] = None
    connected_at: Optional[str] = None
    has_env_config: bool
    using_env_config: bool


class GmailDisconnectResponse(BaseModel):
    success: bool = True
    message: str


class SendTestEmailCommand(BaseModel):
    email: Optional[EmailStr] = None


class SendTestEmailResponse(BaseModel):
    success: bool = True
    message: str
