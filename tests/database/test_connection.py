from __future__ import annotations

import pytest

from src.school_admin.school_admin.core.exceptions import ConfigurationError
from src.school_admin.school_admin.database import connection
from src.school_admin.school_admin.database.connection import DatabaseConnection, SupabaseConfig

CONFIG = SupabaseConfig(url="http://localhost:54321", key="anon-key")


@pytest.fixture
def created(monkeypatch):
    calls = []

    def fake_create_client(url, key, options=None):
        calls.append((url, key, options))
        return object()

    monkeypatch.setattr(connection, "create_client", fake_create_client)
    return calls


def test_signed_in_client_sends_access_token_as_bearer(created):
    conn = DatabaseConnection(CONFIG, access_token_provider=lambda: "user-jwt")

    conn.connect()

    url, key, options = created[0]
    assert (url, key) == ("http://localhost:54321", "anon-key")
    assert options.headers["Authorization"] == "Bearer user-jwt"


def test_anonymous_or_signed_out_client_uses_anon_key_only(created):
    conn = DatabaseConnection(CONFIG, access_token_provider=lambda: None)

    conn.connect()
    DatabaseConnection(CONFIG, access_token_provider=lambda: "user-jwt").connect(anonymous=True)

    assert [options for _, _, options in created] == [None, None]


def test_missing_settings_are_a_configuration_error():
    with pytest.raises(ConfigurationError, match="Missing Supabase environment variables"):
        DatabaseConnection(SupabaseConfig(url="", key="anon-key"))
