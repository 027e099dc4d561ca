# services/headlines/app/decoder.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from services.headlines.app.errors import MalformedFeedError, MalformedRecordError
from shared.app_logging.logger import get_logger
from shared.schemas.article import Article

logger = get_logger("headlines.decoder")

# Feed key -> (Article field, default)
OPTIONAL_FIELDS = {
    "title": ("title", ""),
    "description": ("description", ""),
    "url": ("url", ""),
    "urlToImage": ("image_url", ""),
    "author": ("author", "Unknown"),
    "content": ("content", ""),
}


def secure_image_url(url: str) -> str:
    """Upgrade an ``http:`` image link to ``https:``; anything else is returned as-is."""
    if url.startswith("http:"):
        return "https:" + url[len("http:"):]
    return url


def parse_published_at(ts_raw: Any) -> datetime:
    """
    Parse an ISO-8601 date or date-time into an aware UTC datetime.

    Accepts a trailing ``Z`` and either ``T`` or a space as separator.
    Naive values are taken as UTC. Raises ValueError when parsing fails.
    """
    if not isinstance(ts_raw, str) or not ts_raw.strip():
        raise ValueError(f"publishedAt must be a non-empty string, got {ts_raw!r}")

    text = ts_raw.strip()
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"

    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _string_or_default(record: Dict[str, Any], key: str, default: str) -> str:
    value = record.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        logger.debug(f"Ignoring non-string {key!r} value {value!r}")
        return default
    return value


def decode_article(record: Any, index: int) -> Article:
    """Build one Article from a raw feed record, substituting defaults."""
    if not isinstance(record, dict):
        raise MalformedRecordError(index, f"expected an object, got {type(record).__name__}")

    fields = {
        name: _string_or_default(record, key, default)
        for key, (name, default) in OPTIONAL_FIELDS.items()
    }
    fields["image_url"] = secure_image_url(fields["image_url"])

    try:
        fields["published_at"] = parse_published_at(record.get("publishedAt"))
    except ValueError as e:
        raise MalformedRecordError(index, f"unparsable publishedAt ({e})") from e

    return Article(**fields)


def decode(document: Any, skip_malformed: bool = False) -> List[Article]:
    """
    Turn a feed document into the ordered list of displayable articles.

    Raises MalformedFeedError when ``articles`` is missing or not a list.
    A bad record raises MalformedRecordError and aborts the decode, unless
    ``skip_malformed`` is set, in which case it is logged and omitted.
    Articles without an image are dropped; relative order is preserved.
    """
    if not isinstance(document, dict):
        raise MalformedFeedError(f"expected a JSON object, got {type(document).__name__}")
    if "articles" not in document:
        raise MalformedFeedError("missing top-level 'articles' field")

    records = document["articles"]
    if not isinstance(records, list):
        raise MalformedFeedError(f"'articles' must be a list, got {type(records).__name__}")

    articles = []
    for index, record in enumerate(records):
        try:
            articles.append(decode_article(record, index))
        except MalformedRecordError as e:
            if not skip_malformed:
                raise
            logger.warning(f"⚠️ Skipping {e}")

    kept = [article for article in articles if article.image_url]
    logger.debug(f"Decoded {len(records)} records, kept {len(kept)} with images")
    return kept
