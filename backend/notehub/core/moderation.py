"""
Keyword moderation filter for user-supplied text fields.

Deliberately crude: case-folded substring match against a denylist, no word
boundaries, no stemming. "killer" is flagged because it contains "kill".
"""

from notehub.config import get_settings


def find_banned_term(text: str | None, banned: list[str] | None = None) -> str | None:
    """Return the first banned term contained in `text`, or None."""
    if not text:
        return None
    if banned is None:
        banned = get_settings().banned_keywords
    lower_text = text.lower()
    for word in banned:
        if word and word.lower() in lower_text:
            return word
    return None


def is_safe(text: str | None, banned: list[str] | None = None) -> bool:
    """True if no banned term occurs in `text`. Empty or missing text is safe."""
    return find_banned_term(text, banned) is None
