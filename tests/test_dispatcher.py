import os, sys
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
import threading
import time

import pytest
import responses

from scraper.atcoder_scraper import AtCoderScraper
from scraper.dispatcher import SampleDispatcher, DispatchSummary
from scraper.models import Sample
from utils.config import FetchConfig
from utils.error_handler import NotFoundError, FetchError, error_reporter
from utils.file_manager import FileManager


class RecordingScraper:
    """Test double that records call intervals and concurrency."""

    def __init__(self, delay=0.05, failures=None):
        self.delay = delay
        self.failures = failures or {}
        self.calls = []
        self.intervals = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def fetch_samples(self, contest_id, problem_id):
        with self._lock:
            self.calls.append((contest_id, problem_id))
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        start = time.monotonic()
        try:
            time.sleep(self.delay)
            if problem_id in self.failures:
                raise self.failures[problem_id]
            return [Sample(f"{problem_id} in {i}\n", f"{problem_id} out {i}\n") for i in range(1, 3)]
        finally:
            end = time.monotonic()
            with self._lock:
                self.active -= 1
                self.intervals.append((start, end))


@pytest.fixture(autouse=True)
def clear_error_history():
    error_reporter.clear()
    yield
    error_reporter.clear()


def make_config(tmp_path, **kwargs):
    values = {"contest_id": "abc349", "problem_range": "a-g", "concurrency": 4,
              "output_dir": str(tmp_path / "testcases")}
    values.update(kwargs)
    return FetchConfig(**values)


def test_requires_contest_id(tmp_path):
    with pytest.raises(ValueError):
        SampleDispatcher(make_config(tmp_path, contest_id=""), RecordingScraper())


def test_one_task_per_problem(tmp_path):
    scraper = RecordingScraper(delay=0.01)
    summary = SampleDispatcher(make_config(tmp_path), scraper).run()

    assert sorted(problem for _, problem in scraper.calls) == list("abcdefg")
    assert all(contest == "abc349" for contest, _ in scraper.calls)
    assert summary == DispatchSummary(succeeded=7, failed=0)


@pytest.mark.parametrize("concurrency", [1, 2, 3, 4])
def test_concurrency_limit_respected(tmp_path, concurrency):
    scraper = RecordingScraper(delay=0.03)
    SampleDispatcher(make_config(tmp_path, concurrency=concurrency), scraper).run()

    assert len(scraper.calls) == 7
    assert 1 <= scraper.max_active <= concurrency


def test_concurrency_one_serializes_fetches(tmp_path):
    scraper = RecordingScraper(delay=0.02)
    SampleDispatcher(make_config(tmp_path, concurrency=1, problem_range="a-e"), scraper).run()

    intervals = sorted(scraper.intervals)
    assert len(intervals) == 5
    for (_, previous_end), (next_start, _) in zip(intervals, intervals[1:]):
        assert next_start >= previous_end


def test_files_written_per_problem(tmp_path):
    config = make_config(tmp_path, problem_range="ab")
    SampleDispatcher(config, RecordingScraper(delay=0)).run()

    for problem in "ab":
        folder = tmp_path / "testcases" / problem
        assert sorted(p.name for p in folder.iterdir()) == [
            "sample1.in.txt", "sample1.out.txt", "sample2.in.txt", "sample2.out.txt"]
        assert (folder / "sample2.out.txt").read_text() == f"{problem} out 2\n"


def test_failure_is_isolated(tmp_path):
    scraper = RecordingScraper(delay=0.01, failures={
        "b": NotFoundError("problem b not found (404)", status_code=404),
        "c": FetchError("unexpected status code 500", status_code=500),
        "d": RuntimeError("boom"),
    })
    summary = SampleDispatcher(make_config(tmp_path, problem_range="a-e"), scraper).run()

    assert summary == DispatchSummary(succeeded=2, failed=3)
    output = tmp_path / "testcases"
    assert sorted(p.name for p in output.iterdir()) == ["a", "e"]
    assert error_reporter.get_error_summary()["categories"] == {"unknown": 1}


def test_save_failure_is_isolated(tmp_path):
    output = tmp_path / "testcases"
    output.mkdir()
    (output / "b").write_text("not a directory")

    summary = SampleDispatcher(make_config(tmp_path, problem_range="a-c"),
                               RecordingScraper(delay=0)).run()

    assert summary == DispatchSummary(succeeded=2, failed=1)
    assert (output / "a" / "sample1.in.txt").exists()
    assert (output / "c" / "sample1.in.txt").exists()


def test_empty_range(tmp_path):
    scraper = RecordingScraper()
    summary = SampleDispatcher(make_config(tmp_path, problem_range="g-a"), scraper).run()

    assert summary == DispatchSummary(0, 0)
    assert scraper.calls == []


def test_zero_samples_still_creates_folder(tmp_path):
    class EmptyScraper:
        def fetch_samples(self, contest_id, problem_id):
            return []

    summary = SampleDispatcher(make_config(tmp_path, problem_range="a"), EmptyScraper()).run()

    assert summary == DispatchSummary(1, 0)
    folder = tmp_path / "testcases" / "a"
    assert folder.is_dir()
    assert list(folder.iterdir()) == []


@responses.activate
def test_not_found_problem_writes_nothing(tmp_path):
    base = "https://atcoder.jp/contests/abc349/tasks/abc349_"
    responses.add(responses.GET, base + "a",
                  body="<section><h3>Sample Input 1</h3><pre>1</pre></section>"
                       "<section><h3>Sample Output 1</h3><pre>2</pre></section>",
                  status=200)
    responses.add(responses.GET, base + "b", body="Not Found", status=404)

    config = make_config(tmp_path, problem_range="a-b")
    with AtCoderScraper() as scraper:
        summary = SampleDispatcher(config, scraper, FileManager(config.output_dir)).run()

    assert summary == DispatchSummary(1, 1)
    output = tmp_path / "testcases"
    assert (output / "a" / "sample1.in.txt").read_text() == "1"
    assert (output / "a" / "sample1.out.txt").read_text() == "2"
    assert not (output / "b").exists()


def test_wide_range_uses_at_most_concurrency_threads(tmp_path):
    class ThreadRecordingScraper(RecordingScraper):
        def __init__(self):
            super().__init__(delay=0.01)
            self.thread_names = set()

        def fetch_samples(self, contest_id, problem_id):
            with self._lock:
                self.thread_names.add(threading.current_thread().name)
            return super().fetch_samples(contest_id, problem_id)

    scraper = ThreadRecordingScraper()
    before = threading.active_count()
    summary = SampleDispatcher(make_config(tmp_path, problem_range="a-z", concurrency=3), scraper).run()

    assert summary == DispatchSummary(26, 0)
    assert len(scraper.calls) == 26
    assert 1 <= len(scraper.thread_names) <= 3
    assert threading.active_count() <= before
