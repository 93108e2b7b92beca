"""
Tests for chetutils.extensions.pinyin.
"""

import pytest

from chetutils.extensions import pinyin


class TestPinyin:
    """Test GB2312 level-1 transliteration."""

    @pytest.mark.parametrize("text, expected", [
        ("你好", "nihao"),
        ("中国", "zhongguo"),
        ("北京", "beijing"),
        ("啊", "a"),
    ])
    def test_to_pinyin(self, text, expected):
        """Toneless syllables."""
        assert pinyin.to_pinyin(text) == expected

    def test_mixed_text_passes_through(self):
        """ASCII and punctuation are copied."""
        assert pinyin.to_pinyin("Hi, 你好!") == "Hi, nihao!"

    def test_empty(self):
        """None and "" give ""."""
        assert pinyin.to_pinyin(None) == ""
        assert pinyin.to_pinyin("") == ""

    def test_codes(self):
        """Signed two-byte codes and level-1 bounds."""
        assert pinyin.gb2312_code("啊") == pinyin.LEVEL1_FIRST_CODE
        assert pinyin.gb2312_code("a") is None
        assert pinyin.gb2312_code("€") is None

    def test_level2_character_unmapped(self):
        """Level-2 characters have no syllable."""
        assert pinyin.syllable_for("亍") is None
        assert pinyin.to_pinyin("亍") == "亍"
