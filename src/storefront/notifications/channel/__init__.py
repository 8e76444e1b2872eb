"""Email channel factory.

Provides get_email_channel() / set_email_channel() to swap implementations:
- FakeEmailAdapter for development and testing (default)
- SmtpEmailAdapter when EMAIL_BACKEND=smtp
"""

import os

from storefront.notifications.channel.email_port import EmailPort

_current_channel: EmailPort | None = None


def get_email_channel() -> EmailPort:
    global _current_channel
    if _current_channel is None:
        if os.getenv("EMAIL_BACKEND", "fake").lower() == "smtp":
            from storefront.notifications.channel.smtp_email import SmtpEmailAdapter

            _current_channel = SmtpEmailAdapter.from_env()
        else:
            from storefront.notifications.channel.fake_email import FakeEmailAdapter

            _current_channel = FakeEmailAdapter()
    return _current_channel


def set_email_channel(channel: EmailPort) -> None:
    """Override the active email channel (useful for tests)."""
    global _current_channel
    _current_channel = channel


def reset_email_channel() -> None:
    global _current_channel
    _current_channel = None
