"""
Tests for environment-driven configuration.
"""
from storefinder.config import Config
from storefinder.search.progressive import SearchSettings


class TestConfig:

    def test_missing_credentials_reported(self, monkeypatch):
        monkeypatch.setattr(Config, "NAVER_CLIENT_ID", None)
        monkeypatch.setattr(Config, "NAVER_CLIENT_SECRET", "")

        errors = Config.validate()

        assert "NAVER_CLIENT_ID not set in environment" in errors
        assert "NAVER_CLIENT_SECRET not set in environment" in errors
        assert not Config.has_naver_credentials()
        assert not Config.is_valid()

    def test_valid_configuration(self, monkeypatch):
        monkeypatch.setattr(Config, "NAVER_CLIENT_ID", "id")
        monkeypatch.setattr(Config, "NAVER_CLIENT_SECRET", "secret")
        monkeypatch.setattr(Config, "SEARCH_DISPLAY", 100)
        monkeypatch.setattr(Config, "SEARCH_MAX_START", 1000)
        monkeypatch.setattr(Config, "SEARCH_PAGES_PER_BATCH", 2)
        monkeypatch.setattr(Config, "SEARCH_SORT_OPTIONS", ("sim", "date"))

        assert Config.validate() == []

    def test_max_start_beyond_api_limit(self, monkeypatch):
        monkeypatch.setattr(Config, "SEARCH_MAX_START", 1100)

        assert any("SEARCH_MAX_START" in error for error in Config.validate())

    def test_invalid_sort_option(self, monkeypatch):
        monkeypatch.setattr(Config, "SEARCH_SORT_OPTIONS", ("sim", "popular"))

        assert any("popular" in error for error in Config.validate())

    def test_cors_origins(self, monkeypatch):
        monkeypatch.setattr(Config, "CORS_ORIGINS", "https://a.example, https://b.example")
        assert Config.get_cors_origins() == ["https://a.example", "https://b.example"]

        monkeypatch.setattr(Config, "CORS_ORIGINS", "")
        assert Config.get_cors_origins() == ["*"]

    def test_summary_hides_secrets(self, monkeypatch):
        monkeypatch.setattr(Config, "NAVER_CLIENT_SECRET", "top-secret")

        assert "top-secret" not in str(Config.get_summary())

    def test_search_settings_from_config(self, monkeypatch):
        monkeypatch.setattr(Config, "SEARCH_MIN_INTERSECTION", 5)
        monkeypatch.setattr(Config, "SEARCH_SORT_OPTIONS", ("date",))
        monkeypatch.setattr(Config, "SEARCH_PARTIAL_ON_ERROR", True)

        settings = SearchSettings.from_config()

        assert settings.min_intersection == 5
        assert settings.sort_options == ("date",)
        assert settings.partial_on_error is True
