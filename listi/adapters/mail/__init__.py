"""Mail sender adapters, selected by ``Settings.mail_provider``."""

from listi.config.settings import Settings

from .console import ConsoleMailSender
from .http_api import HttpApiMailSender
from .smtp import SmtpMailSender

__all__ = ["ConsoleMailSender", "HttpApiMailSender", "SmtpMailSender", "build_mail_sender"]


def build_mail_sender(settings: Settings) -> ConsoleMailSender | SmtpMailSender | HttpApiMailSender:
    """Construct the configured mail sender."""
    if settings.mail_provider == "smtp":
        return SmtpMailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            from_address=settings.mail_from_address,
            from_name=settings.app_name,
            username=settings.smtp_user,
            password=settings.smtp_password,
            starttls=settings.smtp_starttls,
            timeout=settings.smtp_timeout,
        )
    if settings.mail_provider == "http":
        if not settings.mail_api_key:
            raise ValueError("mail_api_key is required when mail_provider is 'http'")
        return HttpApiMailSender(
            api_url=settings.mail_api_url,
            api_key=settings.mail_api_key,
            from_address=settings.mail_from_address,
            from_name=settings.app_name,
            timeout=settings.mail_api_timeout,
        )
    return ConsoleMailSender()
