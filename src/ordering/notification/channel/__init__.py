"""Channel adapter registry for order notifications.

Only email is wired up. The fake adapter is the default; a real provider
adapter is selected with NOTIFICATION_EMAIL_ADAPTER in production.
"""

import os

_channel_instances: dict[str, object] = {}

EMAIL = "email"


def get_channel(channel_type: str = EMAIL):
    """Return the configured channel adapter (singleton per channel type)."""
    if channel_type not in _channel_instances:
        if channel_type == EMAIL:
            adapter = os.environ.get("NOTIFICATION_EMAIL_ADAPTER", "fake")
            if adapter != "fake":
                raise ValueError(f"Unknown email adapter: {adapter}")

            from ordering.notification.channel.fake_email import FakeEmailAdapter

            _channel_instances[channel_type] = FakeEmailAdapter()
        else:
            raise ValueError(f"Unknown channel type: {channel_type}")

    return _channel_instances[channel_type]


def reset_channels():
    """Reset all channel singletons (useful for testing)."""
    _channel_instances.clear()
