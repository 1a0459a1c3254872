import pytest
from pydantic import ValidationError

from shared.auth.settings import SEVEN_DAYS_SECONDS, AuthSettings


class TestAuthSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("AUTH_PIN_HASHER", raising=False)
        settings = AuthSettings()
        assert settings.pin_hasher == "bcrypt"
        assert settings.bcrypt_rounds == 12
        assert settings.session_ttl_seconds == SEVEN_DAYS_SECONDS
        assert settings.cookie_secure is False

    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("AUTH_DATABASE_PATH", "/tmp/arcade.db")
        monkeypatch.setenv("AUTH_PIN_HASHER", "sha256")
        monkeypatch.setenv("AUTH_COOKIE_SECURE", "true")
        settings = AuthSettings()
        assert settings.database_path == "/tmp/arcade.db"
        assert settings.pin_hasher == "sha256"
        assert settings.cookie_secure is True

    def test_rejects_unknown_hasher(self):
        with pytest.raises(ValidationError):
            AuthSettings(pin_hasher="md5")

    @pytest.mark.parametrize("rounds", [3, 17])
    def test_rejects_bcrypt_rounds_out_of_range(self, rounds):
        with pytest.raises(ValidationError):
            AuthSettings(bcrypt_rounds=rounds)

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValidationError):
            AuthSettings(session_ttl_seconds=0)
