"""
Gmail Connection Use Cases

OAuth connect flow and credential management for outbound email.
"""

from .start_gmail_oauth_use_case import StartGmailOAuthUseCase
from .complete_gmail_oauth_use_case import CompleteGmailOAuthUseCase
from .gmail_status_use_case import GmailStatusUseCase
from .disconnect_gmail_use_case import DisconnectGmailUseCase
from .send_test_email_use_case import SendTestEmailUseCase
from .dtos import (
    StartGmailOAuthCommand,
    GmailAuthResponse,
    GmailConnectedResponse,
    GmailStatusResponse,
    GmailDisconnectResponse,
    SendTestEmailCommand,
    SendTestEmailResponse,
)

__all__ = [
    "StartGmailOAuthUseCase",
    "CompleteGmailOAuthUseCase",
    "GmailStatusUseCase",
    "DisconnectGmailUseCase",
    "SendTestEmailUseCase",
    "StartGmailOAuthCommand",
    "GmailAuthResponse",
    "GmailConnectedResponse",
    "GmailStatusResponse",
    "GmailDisconnectResponse",
    "SendTestEmailCommand",
    "SendTestEmailResponse",
]
