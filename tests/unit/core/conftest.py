"""Shared fixtures for core unit tests"""

import pytest
from markdown_it.token import Token

from mdplain.core.parse import make_parser
from mdplain.core.pipeline import render_tokens
from mdplain.options import PlainTextOptions


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text.

## Heading 2

- item one
- item two

```python
print("hello")
```

---

Footer paragraph.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("gfm-like")


@pytest.fixture(name="options")
def options_fixture():
    return PlainTextOptions()


@pytest.fixture(name="tok")
def tok_fixture():
    """Factory for hand-built tokens: tok('text', content='hi'), tok('heading_open', tag='h2', nesting=1)."""
    def _make(type_: str, tag: str = "", nesting: int = 0, **kwargs) -> Token:
        return Token(type_, tag, nesting, **kwargs)
    return _make


@pytest.fixture(name="render")
def render_fixture(parser):
    """Render markdown through the real parser; keyword args become PlainTextOptions fields."""
    def _render(md: str, **opts) -> str:
        return render_tokens(parser.parse(md), PlainTextOptions(**opts))
    return _render
