"""
Unit tests for episode number parsing.

Tests the release title notations and the zero-padding rules.
"""

import pytest

from mikanfeed.core.utils.episode_parser import (
    episode_key,
    extract_episode_no,
    format_episode_no,
    pad_episode_no,
    parse_episode,
)
from tests.fixtures.test_data import SAMPLE_RELEASE_TITLES, UNRESOLVED_RELEASE_TITLES


class TestParseEpisode:
    """Tests for parse_episode()."""

    @pytest.mark.parametrize('title,expected', SAMPLE_RELEASE_TITLES)
    def test_extract_single_episode(self, title, expected):
        """Should read a single episode number from common title formats."""
        assert extract_episode_no(title) == expected

    @pytest.mark.parametrize('title', UNRESOLVED_RELEASE_TITLES)
    def test_unresolved_titles(self, title):
        """Batch and unparsable titles have no single episode number."""
        assert extract_episode_no(title) is None

    def test_batch_range_returns_list(self):
        assert parse_episode('[Group] Show 01-03 [1080p]') == [1, 2, 3]

    def test_tilde_range_allows_spaces(self):
        assert parse_episode('[Group] Show [01 ~ 04][1080p]') == [1, 2, 3, 4]

    def test_spaced_dash_is_separator(self):
        """'Show - 12' is a separator, not a range."""
        assert parse_episode('[Group] Show - 12 [1080p]') == 12

    def test_number_in_show_name_loses_to_later_bracket(self):
        """A dash number inside the show name must not shadow the real episode."""
        title = '[云光字幕组] 86 -不存在的战区- 86 - Eighty Six [07][简体双语][1080p]'
        assert parse_episode(title) == 7

    def test_resolution_is_not_episode(self):
        assert parse_episode('[Group] Show [1080p]') is None

    def test_version_suffix(self):
        assert parse_episode('[Group] Show - 05v2 [1080p]') == 5

    def test_end_suffix(self):
        assert parse_episode('[Group] Show - 12 END [1080p]') == 12

    def test_fullwidth_digits(self):
        assert parse_episode('【字幕组】Show 第０７话') == 7

    def test_non_string_input(self):
        assert parse_episode(None) is None

    def test_decimal_episode_is_unresolved(self):
        assert extract_episode_no('[Group] Show - 12.5 [1080p]') is None


class TestEpisodeFormatting:
    """Tests for zero-padding helpers."""

    def test_pad_below_ten(self):
        assert pad_episode_no(3) == '03'

    def test_pad_two_digits(self):
        assert pad_episode_no(12) == '12'

    def test_pad_does_not_truncate(self):
        assert pad_episode_no(104) == '104'

    def test_pad_integral_float(self):
        assert pad_episode_no(7.0) == '07'

    def test_pad_fractional_float(self):
        assert pad_episode_no(7.5) == '7.5'

    def test_format_batch_is_none(self):
        assert format_episode_no([1, 2]) is None

    def test_format_none(self):
        assert format_episode_no(None) is None

    def test_episode_key(self):
        assert episode_key('07') == 7
        assert episode_key('104') == 104
        assert episode_key('7.5') is None
        assert episode_key('') is None
