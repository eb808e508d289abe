"""Link context stack: tracks open hyperlinks for title/url/markdown output"""

import re

from mdplain.core.models import LinkStackItem
from mdplain.options import HyperlinkBehavior


EXTERNAL_URL_RE = re.compile(r'^https?://.', re.IGNORECASE)


def is_external_url(href: str) -> bool:
    """True for absolute http(s) URLs; internal and relative links are not tracked."""
    return bool(EXTERNAL_URL_RE.match(href))


class LinkStack:
    """LIFO of open links. Only external links accumulate a title."""

    def __init__(self, behavior: HyperlinkBehavior = "title"):
        self.behavior = behavior
        self._items: list[LinkStackItem] = []

    @property
    def tracking(self) -> bool:
        """True while the innermost open link is an external one."""
        return bool(self._items) and bool(self._items[-1].href)

    def open(self, href: str | None) -> None:
        href = href or ''
        self._items.append(LinkStackItem(href=href if is_external_url(href) else ''))

    def text(self, content: str) -> str | None:
        """Route text into the tracked link.

        Returns the text to stream to the output (title behavior), '' when it
        is held back until close, or None when no external link is open and
        the caller should process the text normally.
        """
        if not self.tracking:
            return None
        self._items[-1].title += content
        return content if self.behavior == "title" else ''

    def close(self) -> str:
        """Pop the innermost link and return whatever must follow its text."""
        if not self._items:
            return ''
        link = self._items.pop()
        if not (link.href and link.title):
            return ''
        if self.behavior == "url":
            return link.href
        if self.behavior == "markdown":
            return f"[{link.title}]({link.href})"
        return ''
