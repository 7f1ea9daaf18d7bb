import re
import unicodedata

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """Lowercase, ASCII-only, hyphen-separated form of ``text``."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = _NON_WORD.sub("", normalized.lower()).strip()
    return _SEPARATORS.sub("-", normalized).strip("-")
