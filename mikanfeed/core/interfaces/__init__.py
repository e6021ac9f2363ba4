"""
Interfaces module.

Contains abstract base classes defining the contracts for repositories
and adapters.
"""

from mikanfeed.core.interfaces.adapters import (
    IFeedReader,
    IHttpClient,
    IMetadataClient,
)
from mikanfeed.core.interfaces.repositories import IEpisodeRepository

__all__ = [
    # Repository Interfaces
    'IEpisodeRepository',
    # Adapter Interfaces
    'IHttpClient',
    'IMetadataClient',
    'IFeedReader',
]
