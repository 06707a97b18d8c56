"""Find ``<img>`` tags in raw HTML and pull out their src/alt attributes."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass

# Attribute values: "double", 'single', or a bare token. All character classes
# are negated sets with no nested quantifiers, so matching stays linear.
_ATTR_VALUE = r"""\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))"""


@dataclass(frozen=True)
class _ImagePatterns:
    tag: re.Pattern[str]
    src: re.Pattern[str]
    alt: re.Pattern[str]


_patterns: _ImagePatterns | None = None
_patterns_lock = threading.Lock()


def _compile() -> _ImagePatterns:
    flags = re.IGNORECASE | re.DOTALL
    return _ImagePatterns(
        tag=re.compile(r"<img\b[^>]*>", flags),
        src=re.compile(r"\bsrc" + _ATTR_VALUE, flags),
        alt=re.compile(r"\balt" + _ATTR_VALUE, flags),
    )


def _get_patterns() -> _ImagePatterns:
    """Compile the pattern set on first use; later calls reuse it."""
    global _patterns  # noqa: PLW0603
    if _patterns is None:
        with _patterns_lock:
            if _patterns is None:
                _patterns = _compile()
    return _patterns


def _first_value(pattern: re.Pattern[str], tag: str) -> str | None:
    match = pattern.search(tag)
    if match is None:
        return None
    return next((group for group in match.groups() if group), None)


def extract_html_images(html: str) -> list[tuple[str, str]]:
    """Return ``(src, alt)`` for each ``<img>`` in ``html``, left to right.

    Tags without a non-empty ``src`` are skipped. A missing alt becomes "".
    """
    patterns = _get_patterns()
    images: list[tuple[str, str]] = []
    for match in patterns.tag.finditer(html):
        tag = match.group(0)
        src = _first_value(patterns.src, tag)
        if not src:
            continue
        images.append((src, _first_value(patterns.alt, tag) or ""))
    return images
