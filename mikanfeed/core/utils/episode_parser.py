"""
Episode number parsing module.

Reads an episode ordinal out of a noisy release title such as
``[Group] Show Name - 12 [1080p]`` or a batch range such as ``Show 01-02``.

Unparsable input is a normal outcome: every function here returns None
instead of raising.
"""

import logging
import re
import unicodedata
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

EpisodeValue = Union[int, List[int]]

_EXTENSION_RE = re.compile(
    r'\.(?:mkv|mp4|avi|ts|m2ts|webm|flv|rmvb|wmv|mov|torrent)\s*$',
    re.IGNORECASE
)

# 在匹配集数前需要清除的干扰信息
_NOISE_PATTERNS = [
    # 日期 / 年份 / 月份
    re.compile(r'\d{4}\s*[-./年]\s*\d{1,2}\s*[-./月]\s*\d{1,2}\s*日?'),
    re.compile(r'[\[(【]\s*(?:19|20)\d{2}\s*[\])】]'),
    re.compile(r'(?:19|20)\d{2}\s*年'),
    re.compile(r'\d{1,2}\s*月(?:新番)?'),
    # 分辨率
    re.compile(r'\d{3,4}\s*[xX×*]\s*\d{3,4}'),
    re.compile(r'(?<!\d)\d{3,4}[pPiI](?![A-Za-z])'),
    re.compile(r'(?<![A-Za-z0-9])[248][kK](?![A-Za-z0-9])'),
    # 编码 / 位深 / 音频
    re.compile(r'[xXhH]\.?26[45]'),
    re.compile(r'(?<![A-Za-z])(?:AV1|VP9|E-?AC-?3|AC-?3|MP[34])(?![A-Za-z0-9])', re.IGNORECASE),
    re.compile(r'\d{1,2}\s*-?\s*bits?', re.IGNORECASE),
    re.compile(r'(?<![\d.])[2578]\.[01](?:\s*ch)?(?![\d.])', re.IGNORECASE),
    re.compile(r'(?<![A-Za-z0-9])\d\s*ch(?![A-Za-z])', re.IGNORECASE),
    # CRC32
    re.compile(r'\[[0-9A-Fa-f]{8}\]'),
    # 季度 / 分卷
    re.compile(r'(?<![A-Za-z0-9])S\d{1,2}(?![0-9E])', re.IGNORECASE),
    re.compile(r'(?:\d+(?:st|nd|rd|th)\s*)?Season\s*\d*', re.IGNORECASE),
    re.compile(r'第\s*[0-9一二三四五六七八九十]+\s*[季期部]'),
    re.compile(r'(?<![A-Za-z])(?:Part|Vol|Cour)\.?\s*\d+', re.IGNORECASE),
]

_VERSION = r'(?:[vV]\d)?'
_END_MARK = r'(?:\s*(?:END|Fin|完))?'

_SXXEYY_RE = re.compile(
    r'(?<![A-Za-z0-9])S\d{1,2}\s?E(\d{1,4})(?:\s?-\s?E?(\d{1,4}))?(?!\d)',
    re.IGNORECASE
)
_CJK_RE = re.compile(r'第\s*(\d{1,4})(?:\s*[-~]\s*(\d{1,4}))?\s*[话話集回]')
# '-' 两侧不允许空格（"Show - 12" 是分隔符），'~' 允许
_RANGE_RE = re.compile(
    rf'(?<![\dA-Za-z.])(\d{{1,4}}){_VERSION}(?:-|\s*~\s*)(\d{{1,4}}){_VERSION}(?![\d.])'
)
_EP_RE = re.compile(
    rf'(?<![A-Za-z])(?:episode|ep|e)\.?\s?(\d{{1,4}}){_VERSION}(?!\d)',
    re.IGNORECASE
)
_DASH_RE = re.compile(
    rf'[-—–]\s*(\d{{1,4}}){_VERSION}{_END_MARK}(?=$|[\s\[\]【】()_,])'
)
_BRACKET_RE = re.compile(rf'[\[【](\d{{1,4}}){_VERSION}{_END_MARK}[\]】]')
_LOOSE_RE = re.compile(
    rf'(?<![\dA-Za-z.])(\d{{1,4}}){_VERSION}{_END_MARK}(?=\s*$|\s+[\[【(])'
)


def _clean_title(title: str) -> str:
    """Normalize width and strip extension and technical tags."""
    text = unicodedata.normalize('NFKC', title)
    text = _EXTENSION_RE.sub('', text)
    for pattern in _NOISE_PATTERNS:
        text = pattern.sub(' ', text)
    return text.strip()


def _as_range(start: str, end: Optional[str]) -> Optional[EpisodeValue]:
    first = int(start)
    if end is None:
        return first
    last = int(end)
    if last <= first:
        return None
    return list(range(first, last + 1))


def parse_episode(title: str) -> Optional[EpisodeValue]:
    """
    Parse the episode ordinal of a release title.

    Recognized notations, in priority order: ``S01E05``, ``第05话``,
    batch ranges (``01-12``, ``01 ~ 12``) and ``EP05``/``E05``. After those, the
    rightmost of a dash separator (``Show - 05``), a bracketed number
    (``[05]``, ``【05】``) or a bare trailing number (``Show 05``) wins.

    Args:
        title: Release title.

    Returns:
        An int for a single episode, a list of ints for a batch release,
        or None if no episode number could be found.
    """
    if not isinstance(title, str) or not title.strip():
        return None

    raw = unicodedata.normalize('NFKC', title)
    match = _SXXEYY_RE.search(raw)
    if match:
        return _as_range(match.group(1), match.group(2))

    text = _clean_title(title)

    match = _CJK_RE.search(text)
    if match:
        return _as_range(match.group(1), match.group(2))

    for match in _RANGE_RE.finditer(text):
        episodes = _as_range(match.group(1), match.group(2))
        if episodes is not None:
            return episodes

    match = _EP_RE.search(text)
    if match:
        return int(match.group(1))

    # 番剧名本身可能含有 "- 86" 之类的数字，取最靠右的候选
    candidates = [
        (match.start(1), int(match.group(1)))
        for pattern in (_DASH_RE, _BRACKET_RE, _LOOSE_RE)
        for match in pattern.finditer(text)
    ]
    if candidates:
        return max(candidates)[1]

    logger.debug(f'🔢 无法识别集数: {title[:80]}')
    return None


def pad_episode_no(value: Union[int, float, str]) -> str:
    """
    Pad an episode ordinal to at least two digits.

    Integral values are zero-padded (``3 -> '03'``) and never truncated
    (``104 -> '104'``). Fractional values (``7.5``) are kept as-is.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).zfill(2) if isinstance(value, int) else str(value)


def format_episode_no(value: Optional[EpisodeValue]) -> Optional[str]:
    """
    Format a parsed value as a single zero-padded episode number.

    Batch (list) and unresolved values both yield None.
    """
    if value is None or isinstance(value, list) or isinstance(value, bool):
        return None
    return pad_episode_no(value)


def extract_episode_no(title: str) -> Optional[str]:
    """
    Extract a single zero-padded episode number from a release title.

    Args:
        title: Release title.

    Returns:
        Episode number string, or None for batch or unparsable titles.
    """
    return format_episode_no(parse_episode(title))


def episode_key(no: Optional[str]) -> Optional[int]:
    """
    Return the numeric join key of an episode number string.

    ``'07'`` and ``'7'`` share the key 7; fractional or empty numbers
    have no key.
    """
    if not no:
        return None
    try:
        return int(no)
    except (TypeError, ValueError):
        return None
