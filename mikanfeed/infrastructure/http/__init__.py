"""
HTTP module.

Provides the shared requests-based HTTP client.
"""

from mikanfeed.infrastructure.http.http_client import HttpClient

__all__ = [
    'HttpClient',
]
