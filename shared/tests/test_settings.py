import pytest
from pydantic import ValidationError

from shared.config.settings import DEFAULT_FEED_URL, FeedSettings, Settings


def test_defaults():
    settings = Settings()
    assert settings.feed.feed_url == DEFAULT_FEED_URL
    assert settings.feed.http_timeout == 10.0
    assert settings.feed.skip_malformed_records is False
    assert settings.service_name == "headlines"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FEED_URL", "https://mirror.test/health.json")
    monkeypatch.setenv("HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("FEED_SKIP_MALFORMED_RECORDS", "true")

    feed = FeedSettings()

    assert feed.feed_url == "https://mirror.test/health.json"
    assert feed.http_timeout == 2.5
    assert feed.skip_malformed_records is True


@pytest.mark.parametrize("url", ["ftp://feed.test/x.json", "not a url", "/relative/path.json"])
def test_rejects_invalid_feed_url(url):
    with pytest.raises(ValidationError):
        FeedSettings(feed_url=url)


def test_rejects_non_positive_timeout():
    with pytest.raises(ValidationError):
        FeedSettings(http_timeout=0)
