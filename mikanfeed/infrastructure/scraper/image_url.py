"""
Image URL normalization module.

Scraped poster URLs point at whichever mirror served the page; they are
rewritten to the canonical image host and optionally routed through an
image proxy (``{proxy}?url={link}``).
"""

from typing import Optional
from urllib.parse import urljoin, urlparse


class ImageUrlNormalizer:
    """
    Poster URL rewriter.

    Example:
        >>> normalizer = ImageUrlNormalizer('https://mikanime.tv', 'https://mikanani.me')
        >>> normalizer.normalize('/images/Bangumi/202501/abc.jpg?width=400')
        'https://mikanani.me/images/Bangumi/202501/abc.jpg'
    """

    def __init__(
        self,
        base: str,
        image_base: str,
        image_proxy: Optional[str] = None
    ):
        """
        Initialize the normalizer.

        Args:
            base: Site base URL, used to resolve relative paths.
            image_base: Canonical image origin.
            image_proxy: Optional proxy endpoint; None disables proxying.
        """
        self._base = base.rstrip('/') + '/'
        self._image_base = image_base.rstrip('/')
        self._image_proxy = image_proxy or None

    def normalize(self, target: Optional[str]) -> Optional[str]:
        """
        Rewrite a scraped poster URL onto the canonical image origin.

        Relative paths are resolved against the site base first; only the
        path is kept. Empty input yields None.
        """
        if not target:
            return None
        path = urlparse(urljoin(self._base, target)).path
        if not path or path == '/':
            return None
        return self.proxy(f'{self._image_base}{path}')

    def proxy(self, link: Optional[str]) -> Optional[str]:
        """Route an absolute image URL through the proxy, if one is set."""
        if not link:
            return None
        if self._image_proxy:
            return f'{self._image_proxy}?url={link}'
        return link
