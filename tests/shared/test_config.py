from shared.config import Settings


def test_defaults(monkeypatch):
    for name in (
        "STOREFRONT_API_URL",
        "STOREFRONT_HTTP_TIMEOUT",
        "STOREFRONT_TEST_PAYMENT_DELAY",
        "STOREFRONT_CATALOG_PAGE_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.api_url == "http://localhost:8080"
    assert settings.http_timeout == 30.0
    assert settings.test_payment_delay == 1.5
    assert settings.catalog_page_size == 100


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("STOREFRONT_API_URL", "https://api.jaee.example/")
    monkeypatch.setenv("STOREFRONT_HTTP_TIMEOUT", "5")
    monkeypatch.setenv("STOREFRONT_TEST_PAYMENT_DELAY", "0")
    monkeypatch.setenv("STOREFRONT_MERCHANT_NAME", "Jaee Store")
    monkeypatch.setenv("STOREFRONT_CATALOG_PAGE_SIZE", "20")

    settings = Settings.from_env()

    assert settings.api_url == "https://api.jaee.example"
    assert settings.http_timeout == 5.0
    assert settings.test_payment_delay == 0.0
    assert settings.merchant_name == "Jaee Store"
    assert settings.catalog_page_size == 20


def test_empty_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("STOREFRONT_HTTP_TIMEOUT", "")
    assert Settings.from_env().http_timeout == 30.0
