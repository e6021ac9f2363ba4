"""
Download descriptor builder module.

Turns an accepted feed entry and the file it produced into the descriptor
handed to the episode store.
"""

import logging

from mikanfeed.core.domain.entities import (
    DownloadDescriptor,
    DownloadedFile,
    FeedEntry,
    SeriesSubscription,
)
from mikanfeed.core.domain.value_objects import EpisodeIdentity
from mikanfeed.core.exceptions import TitleParseError
from mikanfeed.core.utils.episode_parser import extract_episode_no
from mikanfeed.core.utils.timezone_utils import parse_datetime

logger = logging.getLogger(__name__)


class DownloadDescriptorBuilder:
    """
    Builds DownloadDescriptor records for downloaded files.

    The descriptor always overwrites an existing episode record with the
    same number.
    """

    def describe(
        self,
        entry: FeedEntry,
        file: DownloadedFile,
        subscription: SeriesSubscription
    ) -> DownloadDescriptor:
        """
        Build the descriptor for a downloaded file.

        Args:
            entry: Feed entry the file was downloaded from.
            file: The matched file.
            subscription: Series the entry belongs to.

        Returns:
            DownloadDescriptor for the file.

        Raises:
            TitleParseError: If the entry title has no single episode number.
        """
        episode_no = extract_episode_no(entry.title)
        if episode_no is None:
            raise TitleParseError('Unable to resolve episode number', title=entry.title)

        pub_at = parse_datetime(entry.published)
        if entry.published and pub_at is None:
            logger.debug(f'🕒 发布时间无法解析，已忽略: {entry.published}')

        descriptor = DownloadDescriptor(
            series=subscription.identity,
            episode=EpisodeIdentity(title=file.name, no=episode_no, pub_at=pub_at),
            overwrite_episode=True,
            source_id=subscription.id or None,
        )
        logger.debug(
            f'📝 生成下载描述: {descriptor.series.display_name} #{episode_no} -> {file.name}'
        )
        return descriptor
