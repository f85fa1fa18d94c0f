"""
Chat link helpers for contacting the agency over WhatsApp or Telegram.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from app.models.settings import ChatLinks, ChatSettings

# Left unescaped in URI components alongside the unreserved characters
_URI_COMPONENT_SAFE = "!'()*"


def generate_whatsapp_link(phone_number: str, message: str) -> str:
    """Build a wa.me link with a pre-filled message. Non-digits are stripped from the number."""
    clean_phone = re.sub(r"\D", "", phone_number)
    return f"https://wa.me/{clean_phone}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


def generate_telegram_link(username: str) -> str:
    """Build a t.me link. Telegram only supports pre-filled text for bots, so none is added."""
    clean_username = username[1:] if username.startswith("@") else username
    return f"https://t.me/{clean_username}"


def create_client_message(client_name: str, company_name: str) -> str:
    return f"Hello! I'm {client_name} from {company_name}. I'd like to discuss my project."


def build_chat_links(settings: ChatSettings | None, client_name: str, company_name: str) -> ChatLinks:
    message = create_client_message(client_name, company_name)
    if settings is None:
        return ChatLinks(message=message)
    return ChatLinks(
        whatsapp_url=(
            generate_whatsapp_link(settings.whatsapp_number, message)
            if settings.whatsapp_number
            else None
        ),
        telegram_url=(
            generate_telegram_link(settings.telegram_username)
            if settings.telegram_username
            else None
        ),
        message=message,
    )
