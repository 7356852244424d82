"""
Scraper package for AtCoder Sample Fetcher
Contains the base scraper, the AtCoder scraper and the bounded dispatcher
"""

from .base_scraper import BaseScraper
from .atcoder_scraper import AtCoderScraper
from .dispatcher import SampleDispatcher, DispatchSummary
from .models import Sample

__all__ = [
    'BaseScraper',
    'AtCoderScraper',
    'SampleDispatcher',
    'DispatchSummary',
    'Sample'
]
