"""
File Manager for AtCoder Sample Fetcher
Handles directory creation and writing sample files with error handling
"""

import os
from pathlib import Path
from typing import List, Sequence, Union
import logging

from utils.error_handler import FileSystemError, handle_exception

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o755
FILE_MODE = 0o644


class FileManager:
    """
    Utility class for writing sample files under a base directory
    """

    def __init__(self, base_dir: Union[str, Path] = "testcases"):
        """
        Initialize File Manager

        Args:
            base_dir (Union[str, Path]): Root directory for problem folders.
                Nothing is created until samples are saved.
        """
        self.base_dir = Path(base_dir)

    def problem_dir(self, problem_id: str) -> Path:
        return self.base_dir / problem_id

    def ensure_directory(self, path: Union[str, Path]) -> Path:
        """
        Ensure directory exists, creating parents as needed

        Args:
            path (Union[str, Path]): Directory path

        Returns:
            Path: Path object of the directory

        Raises:
            FileSystemError: If directory creation fails
        """
        path_obj = Path(path)

        if path_obj.exists() and not path_obj.is_dir():
            raise FileSystemError(f"Path exists but is not a directory: {path_obj}", str(path_obj))

        try:
            path_obj.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except PermissionError as e:
            raise FileSystemError(f"Permission denied creating directory: {path_obj}", str(path_obj), e) from e
        except OSError as e:
            raise FileSystemError(f"Failed to create folder {path_obj}: {e}", str(path_obj), e) from e

        logger.debug(f"Directory ensured: {path_obj}")
        return path_obj

    def save_text(self, text: str, filepath: Union[str, Path], encoding: str = 'utf-8') -> Path:
        """
        Write text to a file exactly as given

        Raises:
            FileSystemError: If the file cannot be written
        """
        filepath = Path(filepath)
        try:
            fd = os.open(filepath, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
            # newline='' keeps the text byte-identical to what was extracted
            with open(fd, 'w', encoding=encoding, newline='') as f:
                f.write(text)
        except OSError as e:
            raise FileSystemError(f"Failed to write {filepath}: {e}", str(filepath), e) from e

        logger.debug(f"Text saved to: {filepath}")
        return filepath

    @handle_exception
    def save_samples(self, samples: Sequence, folder: Union[str, Path]) -> List[Path]:
        """
        Write each sample as sample{i}.in.txt / sample{i}.out.txt, 1-indexed

        Args:
            samples: Objects with ``input`` and ``output`` text attributes
            folder: Target directory, created if missing

        Returns:
            List[Path]: Written files in order

        Note:
            A failure part way through leaves the files written so far.
        """
        folder = self.ensure_directory(folder)
        written = []

        for index, sample in enumerate(samples, 1):
            written.append(self.save_text(sample.input, folder / f"sample{index}.in.txt"))
            written.append(self.save_text(sample.output, folder / f"sample{index}.out.txt"))

        logger.debug(f"Wrote {len(written)} files to {folder}")
        return written
