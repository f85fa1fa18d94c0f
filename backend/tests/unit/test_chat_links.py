"""
Unit tests for WhatsApp/Telegram link generation.
"""

import pytest
from pydantic import ValidationError

from app.models.settings import ChatSettings, ChatSettingsUpdate
from app.services.chat_links import (
    build_chat_links,
    create_client_message,
    generate_telegram_link,
    generate_whatsapp_link,
)


class TestWhatsAppLink:
    def test_strips_non_digits(self):
        link = generate_whatsapp_link("+1 (555) 123-4567", "Hi")
        assert link == "https://wa.me/15551234567?text=Hi"

    def test_message_is_uri_encoded(self):
        link = generate_whatsapp_link("15551234567", "Hello! I'm here & ready/now")
        assert link == "https://wa.me/15551234567?text=Hello!%20I'm%20here%20%26%20ready%2Fnow"


class TestTelegramLink:
    @pytest.mark.parametrize("username", ["agency_team", "@agency_team"])
    def test_leading_at_is_removed(self, username):
        assert generate_telegram_link(username) == "https://t.me/agency_team"


def test_client_message():
    assert (
        create_client_message("Sam Lee", "Acme Corp")
        == "Hello! I'm Sam Lee from Acme Corp. I'd like to discuss my project."
    )


class TestBuildChatLinks:
    def test_without_settings(self):
        links = build_chat_links(None, "Sam Lee", "Acme Corp")
        assert links.whatsapp_url is None
        assert links.telegram_url is None
        assert "Acme Corp" in links.message

    def test_with_both_channels(self):
        settings = ChatSettings(whatsapp_number="15551234567", telegram_username="agency_team")
        links = build_chat_links(settings, "Sam Lee", "Acme Corp")
        assert links.whatsapp_url.startswith("https://wa.me/15551234567?text=Hello!%20I'm%20Sam%20Lee")
        assert links.telegram_url == "https://t.me/agency_team"

    def test_only_configured_channels(self):
        settings = ChatSettings(telegram_username="agency_team")
        links = build_chat_links(settings, "Sam Lee", "Acme Corp")
        assert links.whatsapp_url is None
        assert links.telegram_url == "https://t.me/agency_team"


class TestChatSettingsValidation:
    @pytest.mark.parametrize("number", ["12345", "1234567890123456", "+15551234567", "555-123-4567"])
    def test_invalid_whatsapp_number(self, number):
        with pytest.raises(ValidationError):
            ChatSettingsUpdate(whatsapp_number=number)

    @pytest.mark.parametrize("username", ["abcd", "@agency_team", "agency-team", "a" * 33])
    def test_invalid_telegram_username(self, username):
        with pytest.raises(ValidationError):
            ChatSettingsUpdate(telegram_username=username)

    def test_blank_values_clear_channels(self):
        settings = ChatSettingsUpdate(whatsapp_number="", telegram_username="")
        assert settings.whatsapp_number is None
        assert settings.telegram_username is None
