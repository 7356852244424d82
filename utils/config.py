"""
Configuration for AtCoder Sample Fetcher

Settings come from built-in defaults, then the ``[fetch]`` section of an
optional INI file, then command line overrides.
"""

import configparser
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator, Optional, Union

from utils.error_handler import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".atcoder_samples"
CONFIG_FILE = CONFIG_DIR / "config.ini"
CONFIG_SECTION = "fetch"


@dataclass(frozen=True)
class FetchConfig:
    """
    Settings for one fetch run.

    Attributes:
        contest_id (str): Contest to fetch; empty means auto-detect the latest one
        problem_range (str): Only the first and last characters are used as bounds
        concurrency (int): Maximum number of problems fetched at the same time
        output_dir (str): Root directory for the per-problem sample folders
        base_url (str): Contest site root
        timeout (int): Per-request timeout in seconds
        contest_prefix (str): Contest family accepted by auto-detection
        log_file (Optional[str]): Extra log destination
    """
    contest_id: str = ""
    problem_range: str = "a-g"
    concurrency: int = 4
    output_dir: str = "testcases"
    base_url: str = "https://atcoder.jp"
    timeout: int = 30
    contest_prefix: str = "abc"
    log_file: Optional[str] = None

    def validate(self) -> "FetchConfig":
        if not self.problem_range:
            raise ConfigurationError("Problem range must not be empty", "problem_range")
        if self.concurrency < 1:
            raise ConfigurationError(
                f"Concurrency must be at least 1, got {self.concurrency}", "concurrency")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}", "timeout")
        return self

    def problem_ids(self) -> Iterator[str]:
        """Yield every problem letter from the first to the last character of the range."""
        start = ord(self.problem_range[0])
        end = ord(self.problem_range[-1])
        for code in range(start, end + 1):
            yield chr(code)

    def with_contest(self, contest_id: str) -> "FetchConfig":
        return replace(self, contest_id=contest_id)


def load_config(path: Optional[Union[str, Path]] = None, **overrides) -> FetchConfig:
    """
    Build a FetchConfig from an INI file and keyword overrides.

    Args:
        path: INI file to read. Defaults to ~/.atcoder_samples/config.ini,
            which is skipped when it does not exist. An explicit path that
            does not exist is an error.
        **overrides: FetchConfig fields; None values are ignored.

    Returns:
        FetchConfig: Validated configuration

    Raises:
        ConfigurationError: If the file cannot be read or a value is invalid
    """
    values = {}
    config_path = Path(path) if path else CONFIG_FILE

    if config_path.exists():
        parser = configparser.ConfigParser()
        try:
            parser.read(config_path, encoding='utf-8')
        except configparser.Error as e:
            raise ConfigurationError(f"Failed to read configuration {config_path}: {e}") from e

        if parser.has_section(CONFIG_SECTION):
            section = parser[CONFIG_SECTION]
            try:
                for key in ("contest_id", "problem_range", "output_dir", "base_url",
                            "contest_prefix", "log_file"):
                    if key in section:
                        values[key] = section.get(key)
                for key in ("concurrency", "timeout"):
                    if key in section:
                        values[key] = section.getint(key)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value in {config_path}: {e}") from e
        logger.debug(f"Configuration loaded from {config_path}")
    elif path:
        raise ConfigurationError(f"Configuration file not found: {config_path}", "config")

    values.update({key: value for key, value in overrides.items() if value is not None})

    try:
        config = FetchConfig(**values)
    except TypeError as e:
        raise ConfigurationError(f"Unknown configuration option: {e}") from e

    return config.validate()
