"""Unit tests for batching helpers."""

import pytest

from infrastructure.platforms.formatters.batching import chunk, split_text

pytestmark = pytest.mark.unit


class TestChunk:
    def test_exact_multiple(self):
        assert chunk([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

    def test_remainder_in_last_chunk(self):
        result = chunk(list(range(51)), 50)

        assert [len(c) for c in result] == [50, 1]
        assert result[1] == [50]

    def test_order_preserved(self):
        items = list(range(23))

        assert [i for c in chunk(items, 10) for i in c] == items

    def test_empty_input_yields_one_empty_chunk(self):
        assert chunk([], 10) == [[]]

    @pytest.mark.parametrize("size", [0, -1])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError, match="positive integer"):
            chunk([1], size)


class TestSplitText:
    def test_splits_into_segments(self):
        assert split_text("abcdefg", 3) == ["abc", "def", "g"]

    def test_segments_rejoin(self):
        text = "x" * 650

        segments = split_text(text, 300)

        assert [len(s) for s in segments] == [300, 300, 50]
        assert "".join(segments) == text

    def test_short_text_single_segment(self):
        assert split_text("hi", 300) == ["hi"]

    def test_empty_text(self):
        assert split_text("", 300) == [""]

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            split_text("abc", 0)
