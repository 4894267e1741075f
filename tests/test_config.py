"""Tests for settings and store config"""
from storefront.config import StoreConfig, load_settings


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("STOREFRONT_STORAGE", "REDIS")
    monkeypatch.setenv("STOREFRONT_DATA_URL", "https://cdn.example/shop")
    monkeypatch.setenv("STOREFRONT_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("UPSTASH_REDIS_REST_URL", "https://redis.example")

    settings = load_settings()

    assert settings.storage_backend == "redis"
    assert settings.data_url == "https://cdn.example/shop"
    assert settings.http_timeout == 2.5
    assert settings.redis_url == "https://redis.example"


def test_invalid_values_fall_back(monkeypatch):
    monkeypatch.setenv("STOREFRONT_STORAGE", "floppy")
    monkeypatch.setenv("STOREFRONT_HTTP_TIMEOUT", "soon")

    settings = load_settings()

    assert settings.storage_backend == "file"
    assert settings.http_timeout == 10.0


def test_env_file_is_loaded(monkeypatch, tmp_path):
    # Register the variable so monkeypatch removes what load_dotenv sets
    monkeypatch.setenv("STOREFRONT_NAMESPACE", "placeholder")
    monkeypatch.delenv("STOREFRONT_NAMESPACE")
    env_file = tmp_path / ".env"
    env_file.write_text("STOREFRONT_NAMESPACE=branch-2\n", encoding="utf-8")

    assert load_settings(env_file).namespace == "branch-2"


def test_store_config_defaults():
    config = StoreConfig()
    assert config.whatsapp_number is None
    assert config.currency == "EGP"
    assert config.ui.toast_duration_ms == 2000
    assert config.ui.banner_interval_ms == 3000
    assert config.ui.featured_limit == 10
    assert config.home.banners == []


def test_store_config_from_document():
    config = StoreConfig.model_validate({
        "whatsappNumber": "201000000000",
        "locale": {"currency": "SAR"},
        "theme": {"primary": "#c2185b"},
        "home": {"banners": ["b1.jpg", "b2.jpg"]},
        "ui": {"bannerIntervalMs": 5000},
        "unknown": True,
    })
    assert config.currency == "SAR"
    assert config.theme["primary"] == "#c2185b"
    assert config.home.banners == ["b1.jpg", "b2.jpg"]
    assert config.ui.banner_interval_ms == 5000
