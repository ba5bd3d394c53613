"""Mailer registry: the email adapter notifications are sent through.

Uses the fake adapter by default; EMAIL_ADAPTER selects another.
"""

import os

_mailer_instance = None


def get_mailer():
    """Return the configured email adapter (singleton)."""
    global _mailer_instance
    if _mailer_instance is None:
        adapter = os.environ.get("EMAIL_ADAPTER", "fake")
        if adapter == "fake":
            from notifications.channel.fake_email import FakeEmailAdapter

            _mailer_instance = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown email adapter: {adapter}")
    return _mailer_instance


def set_mailer(mailer):
    global _mailer_instance
    _mailer_instance = mailer


def reset_mailer():
    """Reset the mailer singleton (useful for testing)."""
    global _mailer_instance
    _mailer_instance = None
