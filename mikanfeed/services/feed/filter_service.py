"""
Filter service module.

Provides include/exclude keyword filtering of feed entry titles.
"""

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class FilterService:
    """
    Keyword filter for release titles.

    Matching is literal and case-sensitive: every include keyword must be
    a substring of the title, and any exclude keyword rejects it. Empty
    keywords are ignored.

    Example:
        >>> service = FilterService()
        >>> service.accept('[Group] Show - 01 [1080p][BDRip]', ['1080p', 'BDRip'], [])
        True
        >>> service.accept('[Group] Show - 01 [1080p]', ['1080p', 'BDRip'], [])
        False
    """

    def accept(
        self,
        title: str,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None
    ) -> bool:
        """
        Check whether a title passes the keyword rules.

        Args:
            title: Title to check.
            include: Keywords that must all appear (empty means no constraint).
            exclude: Keywords any of which rejects the title.

        Returns:
            True if the title is accepted.
        """
        title = title or ''

        for keyword in exclude or ():
            if keyword and keyword in title:
                logger.info(f'⏭️ 过滤项目: {title} - 匹配屏蔽词: {keyword}')
                return False

        for keyword in include or ():
            if keyword and keyword not in title:
                logger.info(f'⏭️ 过滤项目: {title} - 缺少关键词: {keyword}')
                return False

        return True

    def should_filter(
        self,
        title: str,
        include: Optional[Iterable[str]] = None,
        exclude: Optional[Iterable[str]] = None
    ) -> bool:
        """Inverse of accept()."""
        return not self.accept(title, include, exclude)
