import pytest

from content_gateway.config import Settings, load_settings, parse_origins

ENV_VARS = (
    "CONTENT_SERVICE_URL",
    "CONTENT_SERVICE_TIMEOUT",
    "CONTENT_USE_MOCK_DATA",
    "CONTENT_CATALOG_MATCH",
    "CORS_ORIGINS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    assert load_settings() == Settings()


def test_values_from_environment(clean_env):
    clean_env.setenv("CONTENT_SERVICE_URL", "https://gen.example.org/")
    clean_env.setenv("CONTENT_SERVICE_TIMEOUT", "5")
    clean_env.setenv("CONTENT_USE_MOCK_DATA", "yes")
    clean_env.setenv("CONTENT_CATALOG_MATCH", "Longest")
    clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    s = load_settings()
    assert s.service_url == "https://gen.example.org"
    assert s.endpoint_url("/quiz") == "https://gen.example.org/quiz"
    assert s.timeout == 5.0
    assert s.use_mock_data is True
    assert s.catalog_match == "longest"
    assert s.cors_origins == ("http://a.test", "http://b.test")


@pytest.mark.parametrize("name, value", [
    ("CONTENT_SERVICE_TIMEOUT", "soon"),
    ("CONTENT_SERVICE_TIMEOUT", "-1"),
    ("CONTENT_USE_MOCK_DATA", "maybe"),
    ("CONTENT_CATALOG_MATCH", "random"),
])
def test_invalid_values_raise(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(RuntimeError):
        load_settings()


def test_parse_origins():
    assert parse_origins("") == ["*"]
    assert parse_origins("*") == ["*"]
    assert parse_origins("http://a.test,,http://b.test ") == ["http://a.test", "http://b.test"]
