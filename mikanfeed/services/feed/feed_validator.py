"""
Feed entry validator module.

Decides whether a feed entry is a genuinely new episode. The stages run in
a fixed order and stop at the first rejection:

1. extract the episode number (batch or unresolved titles are rejected)
2. include/exclude keyword filter
3. per-series dedup cache (marked before the store lookup)
4. existence check against the episode store
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from mikanfeed.core.domain.entities import FeedEntry, SeriesSubscription
from mikanfeed.core.domain.value_objects import RejectReason, ValidationState
from mikanfeed.core.exceptions import StoreError
from mikanfeed.core.utils.episode_parser import extract_episode_no
from mikanfeed.services.feed.dedup_cache import EpisodeDedupCache
from mikanfeed.services.feed.episode_resolver import EpisodeResolver
from mikanfeed.services.feed.filter_service import FilterService

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """
    Outcome of validating one feed entry.

    Attributes:
        state: Final state (ACCEPTED or REJECTED).
        reason: Why the entry was rejected, None when accepted.
        episode_no: Extracted episode number, if any.
        last_stage: Stage at which the decision was made.
        stages: Every state passed through, ending with the final state.
    """
    state: ValidationState
    reason: Optional[RejectReason] = None
    episode_no: Optional[str] = None
    last_stage: ValidationState = ValidationState.RECEIVED
    stages: List[ValidationState] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        """Check whether the entry was accepted."""
        return self.state == ValidationState.ACCEPTED


class FeedEntryValidator:
    """
    Feed entry validator.

    Example:
        >>> validator = FeedEntryValidator(FilterService(), EpisodeDedupCache(), resolver)
        >>> validator.is_valid(FeedEntry(title='[Group] Show - 07 [1080p]'), subscription)
        True
    """

    def __init__(
        self,
        filter_service: FilterService,
        dedup_cache: EpisodeDedupCache,
        resolver: EpisodeResolver
    ):
        """
        Initialize the validator.

        Args:
            filter_service: Keyword filter.
            dedup_cache: Per-series cache of evaluated episode numbers.
            resolver: Existence check against the episode store.
        """
        self._filter_service = filter_service
        self._dedup_cache = dedup_cache
        self._resolver = resolver

    def validate(self, entry: FeedEntry, subscription: SeriesSubscription) -> ValidationResult:
        """
        Validate a feed entry.

        Args:
            entry: Feed entry to check.
            subscription: Series metadata attached by the caller.

        Returns:
            ValidationResult describing the decision.

        Raises:
            StoreError: If the existence check fails. The dedup mark is
                removed first so a later call retries the lookup.
        """
        stages = [ValidationState.RECEIVED]
        if not subscription.id or not subscription.name:
            logger.warning(f'⚠️ 订阅缺少番剧 ID 或名称，跳过: {entry.title[:60]}')
            return self._reject(RejectReason.MISSING_METADATA, stages)

        episode_no = extract_episode_no(entry.title)
        if episode_no is None:
            logger.debug(f'🔢 无法确定单集集数，跳过: {entry.title[:60]}')
            stages.append(ValidationState.UNRESOLVED)
            return self._reject(RejectReason.UNRESOLVED_EPISODE, stages)
        stages.append(ValidationState.NUMBER_EXTRACTED)

        passed = self._filter_service.accept(entry.title, subscription.include, subscription.exclude)
        stages.append(ValidationState.FILTER_CHECKED)
        if not passed:
            return self._reject(RejectReason.FILTERED, stages, episode_no)

        marked = self._dedup_cache.check_and_mark(subscription.id, episode_no)
        stages.append(ValidationState.CACHE_CHECKED)
        if not marked:
            logger.debug(f'📦 [cache] 已处理过: {subscription.name} #{episode_no}')
            return self._reject(RejectReason.DUPLICATE, stages, episode_no)

        try:
            exists = self._resolver.exists(subscription.name, subscription.season, episode_no)
        except StoreError:
            # 查询失败不算已处理，撤销标记以便调用方重试
            self._dedup_cache.discard(subscription.id, episode_no)
            raise

        stages.append(ValidationState.RESOLVED)
        if exists:
            logger.info(f'⏭️ 剧集已存在: {subscription.name} #{episode_no}')
            return self._reject(RejectReason.EXISTS, stages, episode_no)

        logger.info(f'✅ 发现新剧集: {subscription.name} #{episode_no} - {entry.title}')
        return ValidationResult(
            state=ValidationState.ACCEPTED,
            episode_no=episode_no,
            last_stage=stages[-1],
            stages=stages + [ValidationState.ACCEPTED]
        )

    def is_valid(self, entry: FeedEntry, subscription: SeriesSubscription) -> bool:
        """Validate a feed entry and return only the decision."""
        return self.validate(entry, subscription).accepted

    @staticmethod
    def _reject(
        reason: RejectReason,
        stages: List[ValidationState],
        episode_no: Optional[str] = None
    ) -> ValidationResult:
        return ValidationResult(
            state=ValidationState.REJECTED,
            reason=reason,
            episode_no=episode_no,
            last_stage=stages[-1],
            stages=stages + [ValidationState.REJECTED]
        )
