"""
Utils package for AtCoder Sample Fetcher
Contains configuration, error handling and file management
"""

from .config import FetchConfig, load_config
from .file_manager import FileManager

__all__ = ['FetchConfig', 'load_config', 'FileManager']
