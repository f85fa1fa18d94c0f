"""API routers."""

from app.api import (
    analytics,
    auth,
    chat_settings,
    clients,
    dashboard,
    messages,
)

__all__ = [
    "auth",
    "clients",
    "analytics",
    "chat_settings",
    "dashboard",
    "messages",
]
