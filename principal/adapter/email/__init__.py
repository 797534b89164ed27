"""Email adapter."""

from .client import HttpEmailSender, MockEmailSender
from .templates import EmailMessage, build_verification_link, render_verification_email

__all__ = [
    "EmailMessage",
    "HttpEmailSender",
    "MockEmailSender",
    "build_verification_link",
    "render_verification_email",
]
