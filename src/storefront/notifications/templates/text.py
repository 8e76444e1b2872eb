import re
from html import unescape

_BLOCK_END = re.compile(r"</(p|div|h[1-6]|tr|li)>|<br\s*/?>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")


def html_to_text(html: str) -> str:
    """Plain-text alternative of an HTML email body."""
    text = _BLOCK_END.sub("\n", html)
    text = unescape(_TAG.sub(" ", text))
    lines = (" ".join(line.split()) for line in text.splitlines())
    return "\n".join(line for line in lines if line)
