# favsync Notify Module
# Email alerts for critical failures

from favsync.notify.mailer import (
    NotificationDispatchError,
    NotificationDispatcher,
    is_delivery_enabled,
    parse_smtp_host,
    send_notification,
)

__all__ = [
    "NotificationDispatcher",
    "NotificationDispatchError",
    "send_notification",
    "parse_smtp_host",
    "is_delivery_enabled",
]
