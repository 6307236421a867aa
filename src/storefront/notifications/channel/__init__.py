"""Email channel registry.

The Resend adapter is used when ``RESEND_API_KEY`` is configured. Without it
there is no channel and order notifications are skipped. Tests install a
``FakeEmailAdapter`` with ``set_email_channel``.
"""

from storefront.config import get_settings
from storefront.notifications.channel.email_port import EmailPort

_email_channel: EmailPort | None = None
_overridden = False


def get_email_channel() -> EmailPort | None:
    """Return the configured email adapter, or ``None`` when email is not configured."""
    global _email_channel
    if _overridden:
        return _email_channel

    settings = get_settings()
    if settings.resend_api_key is None:
        return None

    if _email_channel is None:
        from storefront.notifications.channel.resend_adapter import ResendEmailAdapter

        _email_channel = ResendEmailAdapter(api_key=settings.resend_api_key, sender=settings.order_email_sender)
    return _email_channel


def set_email_channel(channel: EmailPort | None):
    """Install ``channel`` in place of the configured one. ``None`` disables email."""
    global _email_channel, _overridden
    _email_channel = channel
    _overridden = True


def reset_email_channel():
    """Forget any installed or cached adapter (useful for testing)."""
    global _email_channel, _overridden
    _email_channel = None
    _overridden = False
