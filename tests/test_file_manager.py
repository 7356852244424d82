import os, sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from scraper.models import Sample
from utils.error_handler import FileSystemError
from utils.file_manager import FileManager


def test_save_samples_writes_two_files_per_sample(tmp_path):
    samples = [Sample("1 2\n", "3\n"), Sample("4 5\n", "9\n"), Sample("", "0\n")]
    manager = FileManager(tmp_path)

    written = manager.save_samples(samples, manager.problem_dir("a"))

    folder = tmp_path / "a"
    assert [p.name for p in written] == [
        "sample1.in.txt", "sample1.out.txt",
        "sample2.in.txt", "sample2.out.txt",
        "sample3.in.txt", "sample3.out.txt",
    ]
    assert len(list(folder.iterdir())) == 6
    for index, sample in enumerate(samples, 1):
        assert (folder / f"sample{index}.in.txt").read_bytes() == sample.input.encode('utf-8')
        assert (folder / f"sample{index}.out.txt").read_bytes() == sample.output.encode('utf-8')


def test_save_samples_keeps_text_byte_identical(tmp_path):
    sample = Sample("a\r\nb\n  \n", "日本語\n")
    FileManager(tmp_path).save_samples([sample], tmp_path / "x")

    assert (tmp_path / "x" / "sample1.in.txt").read_bytes() == b"a\r\nb\n  \n"
    assert (tmp_path / "x" / "sample1.out.txt").read_bytes() == "日本語\n".encode('utf-8')


def test_save_samples_creates_nested_directories(tmp_path):
    folder = tmp_path / "deep" / "er" / "c"
    FileManager(tmp_path).save_samples([Sample("1", "1")], folder)

    assert folder.is_dir()


def test_save_samples_overwrites_existing_files(tmp_path):
    manager = FileManager(tmp_path)
    manager.save_samples([Sample("old input that is long", "old")], tmp_path / "a")
    manager.save_samples([Sample("new", "new")], tmp_path / "a")

    assert (tmp_path / "a" / "sample1.in.txt").read_text() == "new"


def test_base_dir_is_not_created_eagerly(tmp_path):
    FileManager(tmp_path / "testcases")

    assert not (tmp_path / "testcases").exists()


def test_ensure_directory_rejects_files(tmp_path):
    target = tmp_path / "a"
    target.write_text("x")

    with pytest.raises(FileSystemError) as excinfo:
        FileManager(tmp_path).save_samples([Sample("1", "2")], target)

    assert excinfo.value.path == str(target)


@pytest.mark.skipif(os.name != 'posix' or os.geteuid() == 0, reason="needs POSIX permissions as non-root")
def test_save_text_permission_denied(tmp_path):
    folder = tmp_path / "locked"
    folder.mkdir()
    folder.chmod(0o500)
    try:
        with pytest.raises(FileSystemError):
            FileManager(tmp_path).save_text("x", folder / "f.txt")
    finally:
        folder.chmod(0o700)
