"""Escaping of text for pango markup."""

_PANGO_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        "'": "&#39;",
    }
)


def pango_escape(text: str) -> str:
    """Return ``text`` with pango markup characters escaped."""
    return text.translate(_PANGO_ESCAPES)