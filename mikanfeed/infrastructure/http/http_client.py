"""
HTTP client module.

Wraps a requests session shared by the scraper, the metadata adapter and the
feed reader. Every request is bounded by a timeout, and any failure is raised
as FetchError rather than returned as an empty body.
"""

import logging
from typing import Any, Dict, Optional

import requests

from mikanfeed.core.config import HttpConfig
from mikanfeed.core.exceptions import FetchError
from mikanfeed.core.interfaces.adapters import IHttpClient

logger = logging.getLogger(__name__)


class HttpClient(IHttpClient):
    """
    requests-based HTTP client.

    Example:
        >>> client = HttpClient(HttpConfig(timeout=10))
        >>> html = client.get_text('https://mikanime.tv')
    """

    def __init__(self, http_config: Optional[HttpConfig] = None):
        """
        Initialize the HTTP client.

        Args:
            http_config: Proxy, timeout and User-Agent settings.
        """
        self._config = http_config or HttpConfig()
        self._timeout = self._config.timeout
        self._session = requests.Session()
        self._session.headers.update({
            'User-Agent': self._config.user_agent
        })

        proxy = self._config.get_proxy()
        if proxy:
            self._session.proxies.update({'http': proxy, 'https': proxy})
            logger.info(f'🌐 使用 HTTP 代理: {proxy}')

    @property
    def timeout(self) -> int:
        """Request timeout in seconds."""
        return self._timeout

    def get_text(self, url: str, params: Optional[Dict[str, Any]] = None) -> str:
        response = self._get(url, params)
        if not response.encoding or response.encoding.lower() == 'iso-8859-1':
            response.encoding = response.apparent_encoding or 'utf-8'
        return response.text

    def get_bytes(self, url: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        return self._get(url, params).content

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self._get(url, params)
        try:
            return response.json()
        except ValueError as e:
            logger.error(f'❌ JSON解析失败: {url} - {e}')
            raise FetchError(f'Invalid JSON response: {e}', url=url)

    def _get(self, url: str, params: Optional[Dict[str, Any]]) -> requests.Response:
        """
        Perform a GET request.

        Raises:
            FetchError: On timeout, transport error or non-2xx status.
        """
        try:
            logger.debug(f'🚀 GET {url} params={params}')
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.Timeout as e:
            logger.error(f'⏱️ 请求超时: {url}')
            raise FetchError(f'Request timed out after {self._timeout}s: {e}', url=url)
        except requests.RequestException as e:
            logger.error(f'❌ 请求异常: {url} - {e}')
            raise FetchError(f'Request failed: {e}', url=url)

        if not 200 <= response.status_code < 300:
            logger.error(f'❌ 请求失败: {url} - HTTP {response.status_code}')
            raise FetchError(
                f'Request failed with status {response.status_code}',
                url=url,
                status_code=response.status_code
            )
        return response

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()
