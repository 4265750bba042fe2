from pathlib import Path

import pytest
from pydantic import ValidationError

from relay_bridge.config import CONFIG_DIR, RelaySettings
from relay_bridge.models import Provider
from relay_bridge.store import CredentialsLinkedIdStore, SQLiteLinkedIdStore


def test_defaults():
    settings = RelaySettings()
    assert settings.config_dir == CONFIG_DIR
    assert CONFIG_DIR == Path.home() / ".warelay"
    assert settings.provider is Provider.WEB
    assert settings.verbose is False
    assert settings.chunk_max_chars == 400
    assert settings.credentials_dir == CONFIG_DIR / "credentials"


def test_provider_is_validated():
    assert RelaySettings(provider="twilio").provider is Provider.TWILIO
    assert RelaySettings(provider=" Web ").provider is Provider.WEB
    with pytest.raises(ValidationError):
        RelaySettings(provider="sms")


def test_chunk_limit_must_be_positive():
    with pytest.raises(ValidationError):
        RelaySettings(chunk_max_chars=0)


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RELAY_BRIDGE_CHUNK_MAX_CHARS", "160")
    monkeypatch.setenv("RELAY_BRIDGE_PROVIDER", "twilio")
    monkeypatch.setenv("RELAY_BRIDGE_CONFIG_DIR", str(tmp_path))

    settings = RelaySettings()
    assert settings.chunk_max_chars == 160
    assert settings.provider is Provider.TWILIO
    assert settings.credentials_dir == tmp_path / "credentials"


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("RELAY_BRIDGE_VERBOSE=true\n")
    assert RelaySettings().verbose is True


def test_build_linked_id_store_defaults_to_credentials(tmp_path):
    store = RelaySettings(config_dir=tmp_path).build_linked_id_store()
    assert isinstance(store, CredentialsLinkedIdStore)
    assert store.credentials_dir == tmp_path / "credentials"


def test_build_linked_id_store_prefers_sqlite(tmp_path):
    store = RelaySettings(lid_mapping_db_path=tmp_path / "lid.db").build_linked_id_store()
    assert isinstance(store, SQLiteLinkedIdStore)
    assert store.get("1") is None
    store.close()
