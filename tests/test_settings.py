"""Tests for settings loading."""

from pathlib import Path

from craft_cms.settings import Settings


class TestSettings:
    """Tests for the Settings class."""

    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("CRAFT_CMS_STORE_URL", "https://store.example.com")
        monkeypatch.setenv("CRAFT_CMS_STORE_KEY", "anon-key")
        monkeypatch.setenv("CRAFT_CMS_LOCAL_STORAGE_PATH", "/tmp/posts.json")

        settings = Settings()

        assert settings.is_configured
        assert settings.LOCAL_STORAGE_PATH == Path("/tmp/posts.json")

    def test_unconfigured_store(self):
        assert not Settings(STORE_URL="https://store.example.com", STORE_KEY="").is_configured

    def test_client_config(self):
        """The client config makes a single attempt by default."""
        config = Settings(STORE_URL="https://store.example.com", STORE_KEY="anon-key").client_config()

        assert config["base_url"] == "https://store.example.com"
        assert config["api_key"] == "anon-key"
        assert config["retry_attempts"] == 1
        assert config["timeout"] == 30
        assert config["headers"]["User-Agent"] == "craft-cms/1.0"
