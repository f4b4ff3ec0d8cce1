"""
Contact Form Use Cases
"""

from .submit_contact_use_case import SubmitContactUseCase
from .dtos import SubmitContactCommand, SubmitContactResponse

__all__ = [
    "SubmitContactUseCase",
    "SubmitContactCommand",
    "SubmitContactResponse",
]
