"""Unit tests for verification email content."""

from principal.adapter.email import build_verification_link, render_verification_email
from principal.adapter.email.templates import VERIFICATION_SUBJECT


class TestBuildVerificationLink:
    def test_link_without_redirect(self):
        link = build_verification_link("https://app.example.com/", "guest@example.com", "abc")

        assert link == "https://app.example.com/#/login?email=guest%40example.com&token=abc"

    def test_redirect_comes_first_and_is_encoded(self):
        link = build_verification_link(
            "https://app.example.com", "guest@example.com", "a-b_c", "/projects/1?tab=files"
        )

        assert link == (
            "https://app.example.com/#/login"
            "?r=%2Fprojects%2F1%3Ftab%3Dfiles&email=guest%40example.com&token=a-b_c"
        )

    def test_empty_redirect_is_omitted(self):
        link = build_verification_link("https://app.example.com", "guest@example.com", "abc", "")

        assert "r=" not in link


class TestRenderVerificationEmail:
    def test_message_fields(self):
        message = render_verification_email(
            "no-reply@example.com", "guest@example.com", "Grace", "https://x/#/login?token=1"
        )

        assert message.subject == VERIFICATION_SUBJECT
        assert message.sender == "no-reply@example.com"
        assert message.recipient == "guest@example.com"
        assert "https://x/#/login?token=1" in message.text_body
        assert message.text_body.startswith("Hi Grace,")

    def test_html_is_escaped(self):
        message = render_verification_email(
            "no-reply@example.com", "guest@example.com", "<b>Grace</b>", "https://x/?a=1&b=2"
        )

        assert "<b>Grace</b>" not in message.html_body
        assert "&lt;b&gt;Grace&lt;/b&gt;" in message.html_body
        assert 'href="https://x/?a=1&amp;b=2"' in message.html_body

    def test_missing_first_name(self):
        message = render_verification_email("s@example.com", "r@example.com", "", "link")

        assert message.text_body.startswith("Hi,")
