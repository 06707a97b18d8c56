"""Shared fixtures and helpers: sample documents, line text extraction."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mdvi.renderer import render_markdown

if TYPE_CHECKING:
    from pathlib import Path

    from mdvi.renderer import RenderedDocument


SAMPLE_MARKDOWN = """\
# Release notes

Intro with **bold** and a [link](https://example.com).

> Quoted remark

![Screenshot](images/shot.png)

1. first
2. second

```python
print("hi")
```
"""


def texts(doc: RenderedDocument) -> list[str]:
    """Return the plain text of every line."""
    return doc.plain_lines()


def content(doc: RenderedDocument) -> list[str]:
    """Return the plain text of every non-blank line."""
    return [line.plain for line in doc.lines if not line.is_blank]


@pytest.fixture
def sample_doc() -> RenderedDocument:
    return render_markdown(SAMPLE_MARKDOWN)


@pytest.fixture
def long_doc() -> RenderedDocument:
    """A document far taller than the test terminal."""
    return render_markdown("\n\n".join(f"Paragraph {i}" for i in range(1, 101)))


@pytest.fixture
def markdown_file(tmp_path: Path) -> Path:
    path = tmp_path / "README.md"
    path.write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    return path
