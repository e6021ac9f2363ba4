"""
Exceptions module.

Contains the exception hierarchy for the MikanFeed application.
All custom exceptions inherit from MikanFeedError for consistent handling.
"""

from typing import Any, Dict, Optional


class MikanFeedError(Exception):
    """
    Base exception for all MikanFeed errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code.
        context: Additional context information for debugging.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or 'UNKNOWN_ERROR'
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.context:
            return f'[{self.code}] {self.message} - Context: {self.context}'
        return f'[{self.code}] {self.message}'


# Fetch exceptions

class FetchError(MikanFeedError):
    """
    Exception raised when a remote fetch fails.

    Covers timeouts, transport errors, non-2xx responses and undecodable
    payloads. A failed fetch is never reported as an empty result.

    Attributes:
        url: The URL that was requested.
        status_code: HTTP status code, if a response was received.
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if url:
            ctx['url'] = url
        if status_code is not None:
            ctx['status_code'] = status_code
        super().__init__(message, 'FETCH_FAILED', ctx)
        self.url = url
        self.status_code = status_code


# Configuration exceptions

class ConfigError(MikanFeedError):
    """Base exception for configuration errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code or 'CONFIG_ERROR', context)


class ConfigValidationError(ConfigError):
    """
    Exception raised when configuration validation fails.

    Attributes:
        field_name: Name of the field that failed validation.
        field_value: The invalid value.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if field_name:
            ctx['field_name'] = field_name
        if field_value is not None:
            ctx['field_value'] = str(field_value)
        super().__init__(message, 'CONFIG_VALIDATION_ERROR', ctx)
        self.field_name = field_name
        self.field_value = field_value


# Database exceptions

class DatabaseError(MikanFeedError):
    """Base exception for database errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code or 'DATABASE_ERROR', context)


class StoreError(DatabaseError):
    """
    Exception raised when the episode existence check fails.

    Must never be interpreted as "episode does not exist".

    Attributes:
        series_name: Series name used in the lookup.
        episode_no: Episode number used in the lookup.
    """

    def __init__(
        self,
        message: str,
        series_name: Optional[str] = None,
        episode_no: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if series_name:
            ctx['series_name'] = series_name
        if episode_no:
            ctx['episode_no'] = episode_no
        super().__init__(message, 'STORE_ERROR', ctx)
        self.series_name = series_name
        self.episode_no = episode_no


# Parse exceptions

class ParseError(MikanFeedError):
    """Base exception for parsing errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, code or 'PARSE_ERROR', context)


class TitleParseError(ParseError):
    """
    Exception raised when no single episode number can be read from a title.

    Attributes:
        title: The title that failed to parse.
    """

    def __init__(
        self,
        message: str,
        title: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if title:
            ctx['title'] = title[:200]  # Truncate for logging
        super().__init__(message, 'TITLE_PARSE_ERROR', ctx)
        self.title = title


class PageParseError(ParseError):
    """
    Exception raised when a fetched page lacks a required element.

    Attributes:
        page_url: URL of the page that failed to parse.
    """

    def __init__(
        self,
        message: str,
        page_url: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if page_url:
            ctx['page_url'] = page_url
        super().__init__(message, 'PAGE_PARSE_ERROR', ctx)
        self.page_url = page_url


class FeedParseError(ParseError):
    """
    Exception raised when an RSS/Atom feed cannot be parsed.

    Attributes:
        feed_url: URL of the feed that failed to parse.
    """

    def __init__(
        self,
        message: str,
        feed_url: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        ctx = context or {}
        if feed_url:
            ctx['feed_url'] = feed_url
        super().__init__(message, 'FEED_PARSE_ERROR', ctx)
        self.feed_url = feed_url
