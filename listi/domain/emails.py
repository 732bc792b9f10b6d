"""Verification email rendering."""

from html import escape


def render_verification_email(username: str, code: str, app_name: str = "LISTI") -> tuple[str, str]:
    """Return (subject, html) for a verification code email."""
    subject = f"Verification code - {app_name}"
    html = (
        f"<h2>Hello {escape(username)},</h2>\n"
        f"<p>Your verification code for {escape(app_name)} is:</p>\n"
        f'<h1 style="color:#007bff">{escape(code)}</h1>\n'
        "<p>Please enter it on the page to activate your account.</p>\n"
    )
    return subject, html
