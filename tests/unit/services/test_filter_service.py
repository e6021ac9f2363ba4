"""Unit tests for FilterService."""

import pytest

from mikanfeed.services.feed.filter_service import FilterService


class TestFilterService:
    """Tests for include/exclude keyword matching."""

    @pytest.fixture
    def service(self):
        return FilterService()

    def test_no_rules_accepts(self, service):
        assert service.accept('[Group] Show - 01 [1080p]') is True
        assert service.accept('[Group] Show - 01 [1080p]', [], []) is True

    def test_include_requires_all(self, service):
        include = ['1080p', 'BDRip']

        assert service.accept('[Group] Show - 01 [1080p]', include) is False
        assert service.accept('[Group] Show - 01 [1080p][BDRip]', include) is True

    def test_any_exclude_rejects(self, service):
        exclude = ['繁日内嵌', '简日内嵌']

        assert service.accept('[Group] Show - 01 [简日内嵌]', exclude=exclude) is False
        assert service.accept('[Group] Show - 01 [简繁内封]', exclude=exclude) is True

    def test_exclude_wins_over_include(self, service):
        title = '[Group] Show - 01 [1080p][CR]'

        assert service.accept(title, include=['1080p'], exclude=['CR']) is False

    def test_case_sensitive(self, service):
        assert service.accept('[Group] Show - 01 [1080P]', include=['1080p']) is False

    def test_empty_keywords_ignored(self, service):
        assert service.accept('[Group] Show - 01', include=[''], exclude=['']) is True

    def test_should_filter_is_inverse(self, service):
        assert service.should_filter('[Group] Show - 01 [CR]', exclude=['CR']) is True
        assert service.should_filter('[Group] Show - 01', exclude=['CR']) is False
