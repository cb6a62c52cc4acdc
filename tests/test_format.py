"""Tests for phosphor.format -- format presets, combination and merging."""

from __future__ import annotations

from phosphor.format import (
    Alignment,
    Format,
    TextCase,
    Wrapping,
    block_wrap,
    center,
    lower,
    no_wrap,
    plain,
    right,
    upper,
    word_wrap,
)


class TestPresets:
    """Preset formats set exactly one option each."""

    def test_plain_resolves_to_none_everywhere(self) -> None:
        fmt = plain()
        assert fmt.alignment is Alignment.NONE
        assert fmt.text_case is TextCase.NONE
        assert fmt.wrapping is Wrapping.NONE

    def test_each_preset_sets_one_category(self) -> None:
        assert center() == Format(align=Alignment.CENTER)
        assert right() == Format(align=Alignment.RIGHT)
        assert upper() == Format(case=TextCase.UPPER)
        assert lower() == Format(case=TextCase.LOWER)
        assert word_wrap() == Format(wrap=Wrapping.WORD)
        assert block_wrap() == Format(wrap=Wrapping.BLOCK)


class TestCombine:
    """Combining formats lets later options win."""

    def test_different_categories_compose(self) -> None:
        fmt = center() | upper() | block_wrap()
        assert fmt == Format(Alignment.CENTER, TextCase.UPPER, Wrapping.BLOCK)

    def test_first_declared_member_wins_within_category(self) -> None:
        assert (right() | center()).alignment is Alignment.CENTER
        assert (block_wrap() | word_wrap()).wrapping is Wrapping.WORD
        assert (word_wrap() | no_wrap()).wrapping is Wrapping.NONE
        assert (lower() | upper()).text_case is TextCase.UPPER

    def test_or_with_other_type_not_supported(self) -> None:
        assert Format.__or__(plain(), 1) is NotImplemented


class TestOver:
    """Unset options fall back to the ambient format."""

    def test_unset_categories_fall_back_to_base(self) -> None:
        fmt = upper().over(word_wrap())
        assert fmt.text_case is TextCase.UPPER
        assert fmt.wrapping is Wrapping.WORD

    def test_call_site_overrides_base(self) -> None:
        assert block_wrap().over(word_wrap()).wrapping is Wrapping.BLOCK
        assert no_wrap().over(word_wrap()).wrapping is Wrapping.NONE

    def test_alignment_not_inherited(self) -> None:
        assert plain().over(center()).alignment is Alignment.NONE
        assert right().over(center()).alignment is Alignment.RIGHT

    def test_with_helpers(self) -> None:
        fmt = center().with_wrap(Wrapping.BLOCK).with_align(Alignment.RIGHT)
        assert fmt == Format(align=Alignment.RIGHT, wrap=Wrapping.BLOCK)
