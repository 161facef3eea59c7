"""Tests for the end-to-end word count pipeline."""

import logging
import tempfile
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from distributed_word_count.partition import Partition
from distributed_word_count.remote import LocalRemoteExecutor
from distributed_word_count.solver import DistributedWordCount, PartialResult, WordCountError, main_solve, solve
from distributed_word_count.solver.execution import WC_EXECUTOR_ENV
from distributed_word_count.solver.solve import capture_result
from distributed_word_count.storage import InMemoryStorage
from distributed_word_count.text import max_tokens_per_line

CONTENT = b"word1 word2 word3\na b c d e f g h\n"

DOCUMENT = (
    b"word1 word2 word3\n"
    b"a b c d e f g h\n"
    b"This line is cut here and spans to the next part.\n"
    b"part 2 starts here, but the previous line was partial. \n"
    b"The very end line has only a few words left."
)


class FailingNodeExecutor(LocalRemoteExecutor):
    """Executor whose listed nodes fail every unit of work."""

    def __init__(self, failing_nodes: set[int], num_nodes: int = 100):
        super().__init__(num_nodes=num_nodes)
        self.failing_nodes = failing_nodes

    def run(self, node_id, func):
        if node_id in self.failing_nodes:
            raise RuntimeError(f"node {node_id} crashed")
        return super().run(node_id, func)


class FailingReadStorage(InMemoryStorage):
    """Storage whose streams fail when opened at one of the given offsets."""

    def __init__(self, data: bytes, failing_offsets: set[int]):
        super().__init__(data)
        self.failing_offsets = failing_offsets

    def open_stream(self, offset: int):
        if offset in self.failing_offsets:
            raise OSError(f"read failed at offset {offset}")
        return super().open_stream(offset)


class BrokenLengthStorage(InMemoryStorage):
    def length(self) -> int:
        raise OSError("metadata service unavailable")


def count(data: bytes, nodes: int, remote=None) -> int:
    remote = remote or LocalRemoteExecutor(num_nodes=nodes)
    return DistributedWordCount(InMemoryStorage(data), remote, num_nodes=nodes).compute_max_tokens_per_line()


@pytest.fixture(params=["threads", "serial"], autouse=True)
def executor_mode(request, monkeypatch) -> str:
    monkeypatch.setenv(WC_EXECUTOR_ENV, request.param)
    return request.param


class TestDistributedWordCount:
    """Test cases for DistributedWordCount.compute_max_tokens_per_line."""

    def test_single_node(self) -> None:
        assert count(CONTENT, 1) == 8

    def test_two_nodes_split_on_terminator(self) -> None:
        """Test that the second partition counts the line after the cut once."""
        assert count(CONTENT, 2) == 8

    def test_empty_object(self) -> None:
        assert count(b"", 1) == 0
        assert count(b"", 100) == 0

    def test_blank_lines_only(self) -> None:
        assert count(b"\n\n\n", 1) == 0
        assert count(b"\n\n\n", 3) == 0

    def test_more_nodes_than_bytes(self) -> None:
        """Test that degenerate partitions contribute 0 without hiding the answer."""
        assert count(b"a b c\n", 10) == 3
        assert count(b"one two\nthree\n", 100) == 2

    def test_single_node_matches_true_maximum(self) -> None:
        assert count(DOCUMENT, 1) == max_tokens_per_line(DOCUMENT) == 11

    def test_longest_line_inside_one_span(self) -> None:
        assert count(DOCUMENT, 2) == 11

    def test_never_overcounts(self) -> None:
        """Test that boundary handling can only lose tokens, never invent them."""
        true_max = max_tokens_per_line(DOCUMENT)
        for nodes in [1, 2, 3, 4, 5, 7, 10, 25, 50, 100]:
            assert 0 <= count(DOCUMENT, nodes) <= true_max

    def test_idempotent(self) -> None:
        job = DistributedWordCount(InMemoryStorage(DOCUMENT), LocalRemoteExecutor(), num_nodes=5)
        first = job.compute_max_tokens_per_line()
        assert job.compute_max_tokens_per_line() == first
        assert job.compute_max_tokens_per_line() == first

    def test_one_failing_partition_does_not_abort(self) -> None:
        remote = FailingNodeExecutor({2})
        # Node 1 sees only "word1 word2 word3"; node 2 held the 8-token line.
        assert count(CONTENT, 2, remote=remote) == 3

    def test_read_failure_inside_one_partition_does_not_abort(self, caplog) -> None:
        """Test that a failed span read loses only that partition's share."""
        # Node 2 corrects its start from 17 to 18 and then fails reading from 18.
        storage = FailingReadStorage(CONTENT, failing_offsets={18})
        job = DistributedWordCount(storage, LocalRemoteExecutor(num_nodes=2), num_nodes=2)

        with caplog.at_level(logging.WARNING):
            assert job.compute_max_tokens_per_line() == 3

        assert "Error processing partition 1: read failed at offset 18" in caplog.text
        assert "1 of 2 partitions failed" in caplog.text

    def test_every_partition_failing_gives_zero(self) -> None:
        remote = FailingNodeExecutor(set(range(1, 5)))
        assert count(CONTENT, 4, remote=remote) == 0

    def test_invalid_node_ids_are_contained(self) -> None:
        """Test that partitions dispatched to unknown nodes only lose their share."""
        assert count(CONTENT, 4) == 3
        assert count(CONTENT, 4, remote=LocalRemoteExecutor(num_nodes=2)) == 2

    def test_start_log_names_executor_policy(self, caplog, executor_mode) -> None:
        with caplog.at_level(logging.INFO):
            count(CONTENT, 2)
        assert f"executor={executor_mode}" in caplog.text
        assert "GIL" not in caplog.text

    def test_length_failure_is_fatal(self) -> None:
        job = DistributedWordCount(BrokenLengthStorage(CONTENT), LocalRemoteExecutor(), num_nodes=2)
        with pytest.raises(WordCountError) as exc_info:
            job.compute_max_tokens_per_line()
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_rejects_invalid_node_count(self) -> None:
        with pytest.raises(ValueError):
            DistributedWordCount(InMemoryStorage(CONTENT), LocalRemoteExecutor(), num_nodes=0)
        with pytest.raises(ValueError):
            DistributedWordCount(InMemoryStorage(CONTENT), LocalRemoteExecutor(), num_nodes=101)

    def test_concurrent_invocations_agree(self) -> None:
        def run_once(_: int) -> int:
            return count(DOCUMENT, 10)

        with ThreadPoolExecutor(max_workers=3) as pool:
            results = list(pool.map(run_once, range(3)))

        assert len(set(results)) == 1


def test_process_pool_mode(monkeypatch) -> None:
    monkeypatch.setenv(WC_EXECUTOR_ENV, "processes")
    assert count(CONTENT, 2) == 8


class TestSolve:
    """Test cases for the file-based solve helpers."""

    def test_solve_reads_file(self) -> None:
        with tempfile.NamedTemporaryFile(mode="wb", suffix=".txt", delete=False) as f:
            f.write(DOCUMENT)
            temp_path = f.name

        try:
            assert solve(temp_path, nodes=1) == 11
            assert solve(temp_path, nodes=2) == 11
        finally:
            Path(temp_path).unlink()

    def test_solve_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            with pytest.raises(WordCountError):
                solve(str(Path(tmp_dir) / "missing.txt"), nodes=2)

    def test_main_solve_prints_result(self, capsys) -> None:
        with tempfile.NamedTemporaryFile(mode="wb", suffix=".txt", delete=False) as f:
            f.write(CONTENT)
            temp_path = f.name

        try:
            main_solve(temp_path, nodes=2)
            assert capsys.readouterr().out.strip() == "8"
        finally:
            Path(temp_path).unlink()


def test_capture_result_wraps_value_and_error() -> None:
    partition = Partition(3, 0, 10)
    assert capture_result(partition, lambda: 7) == PartialResult(3, max_tokens=7)

    def fail() -> int:
        raise OSError("boom")

    result = capture_result(partition, fail)
    assert result.partition_index == 3
    assert result.failed
    assert isinstance(result.error, OSError)
