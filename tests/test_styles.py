"""Tests for the style stack."""

from __future__ import annotations

from mdvi.styles import BASE, BOLD, ITALIC, StyleContext, heading_style


def test_push_with_composes_on_top_of_current() -> None:
    ctx = StyleContext()
    ctx.push_with(BOLD)
    ctx.push_with(ITALIC)
    assert ctx.current.bold
    assert ctx.current.italic
    ctx.pop()
    assert ctx.current.bold
    assert not ctx.current.italic


def test_base_style_is_never_popped() -> None:
    ctx = StyleContext()
    ctx.pop()
    ctx.pop()
    assert ctx.current == BASE
    ctx.push_with(BOLD)
    assert ctx.current.bold
    ctx.pop()
    assert ctx.current == BASE


def test_heading_styles() -> None:
    assert heading_style(1).bold
    assert heading_style(1).underline
    assert heading_style(2).bold
    assert heading_style(4).italic
    assert heading_style(6).italic
    assert not heading_style(6).bold
    assert heading_style(9) == heading_style(6)
