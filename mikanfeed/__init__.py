"""
MikanFeed.

Feed ingestion and episode-resolution engine for Mikan release feeds,
backed by Bangumi metadata.
"""

__version__ = '0.1.0'
