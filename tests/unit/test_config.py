import pytest

from docbot import config


class TestValidateConfig:
    def test_reports_missing_bot_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", None)
        assert config.validate_config() == ["TELEGRAM_BOT_TOKEN"]

    def test_nothing_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "TELEGRAM_BOT_TOKEN", "123:ABC")
        assert config.validate_config() == []

    def test_base_url_has_no_trailing_slash(self) -> None:
        assert not config.APP_BASE_URL.endswith("/")
