"""Verification email content."""

import html
from urllib.parse import quote, urlencode

from pydantic import BaseModel

VERIFICATION_SUBJECT = "Almost there! Please verify your account."


class EmailMessage(BaseModel):
    """Rendered outbound email."""

    sender: str
    recipient: str
    subject: str
    text_body: str
    html_body: str


def build_verification_link(
    web_client_url: str, email: str, code: str, redirect_url: str | None = None
) -> str:
    """Build the web client link a guest follows to verify.

    Format: ``{web_client_url}/#/login?[r=<redirect>&]email=<email>&token=<code>``
    """
    params: dict[str, str] = {}
    if redirect_url:
        params["r"] = redirect_url
    params["email"] = email
    params["token"] = code
    query = urlencode(params, quote_via=quote)
    return f"{web_client_url.rstrip('/')}/#/login?{query}"


def render_verification_email(
    sender: str,
    recipient: str,
    first_name: str,
    link: str,
) -> EmailMessage:
    greeting = f"Hi {first_name}," if first_name else "Hi,"
    text_body = (
        f"{greeting}\n\n"
        "Please confirm your email address to finish setting up your account:\n\n"
        f"{link}\n\n"
        "If you did not request an account you can ignore this message.\n"
    )
    html_body = (
        f"<p>{html.escape(greeting)}</p>"
        "<p>Please confirm your email address to finish setting up your account:</p>"
        f'<p><a href="{html.escape(link)}">Verify my account</a></p>'
        "<p>If you did not request an account you can ignore this message.</p>"
    )
    return EmailMessage(
        sender=sender,
        recipient=recipient,
        subject=VERIFICATION_SUBJECT,
        text_body=text_body,
        html_body=html_body,
    )
