"""Tests for the bounded image queue."""

import pytest

from roilens.domain.common.errors import DomainException, ErrorCode, InvalidInputException
from roilens.infrastructure.queue.image_queue_service import ImageQueueService


@pytest.fixture
def clock():
    ticks = iter(range(1000, 100000, 10))
    return lambda: next(ticks)


@pytest.fixture
def queue(logger, clock):
    return ImageQueueService(logger, clock=clock)


# ---------------------------------------------------------------------------
# push
# ---------------------------------------------------------------------------

class TestPush:
    def test_push_returns_running_count(self, queue):
        assert queue.push("a").count == 1
        assert queue.push("b").count == 2
        assert queue.size() == 2

    @pytest.mark.parametrize("payload", [None, "", 42, b"bytes"])
    def test_rejects_invalid_payload(self, queue, payload):
        with pytest.raises(InvalidInputException) as exc_info:
            queue.push(payload)
        assert exc_info.value.error.code == ErrorCode.INVALID_IMAGE_DATA
        assert queue.size() == 0

    def test_invalid_input_is_a_domain_exception(self, queue):
        with pytest.raises(DomainException):
            queue.push("")

    def test_no_warning_below_threshold(self, queue):
        for i in range(9):
            result = queue.push(f"img{i}")
        assert result.count == 9
        assert result.warning is None

    def test_warning_from_threshold(self, queue):
        for i in range(10):
            result = queue.push(f"img{i}")
        assert result.count == 10
        assert result.warning == "Queue has 10 images. Will auto-clear at 20."

    def test_no_warning_after_explicit_clear(self, queue):
        for i in range(12):
            queue.push(f"img{i}")

        queue.clear()
        result = queue.push("fresh")

        assert result.count == 1
        assert result.warning is None

    def test_full_queue_accepts_twentieth_image(self, queue):
        for i in range(20):
            result = queue.push(f"img{i}")
        assert result.count == 20
        assert result.warning is None

    def test_overflow_clears_before_appending(self, queue, logger):
        for i in range(20):
            queue.push(f"img{i}")

        result = queue.push("img20")

        assert result.count == 1
        assert queue.drain_view() == ["img20"]
        assert any("auto-cleared" in m for m in logger.messages("info"))

    def test_size_never_exceeds_capacity(self, queue):
        for i in range(55):
            queue.push(f"img{i}")
            assert 1 <= queue.size() <= 20
        # 55 pushes: two full batches and 15 more
        assert queue.size() == 15

    def test_custom_limits(self, logger):
        queue = ImageQueueService(logger, max_size=3, warning_threshold=2)
        assert queue.push("a").warning is None
        assert queue.push("b").warning == "Queue has 2 images. Will auto-clear at 3."
        queue.push("c")
        assert queue.push("d").count == 1


# ---------------------------------------------------------------------------
# Reading and removing
# ---------------------------------------------------------------------------

class TestReadAndRemove:
    def test_drain_view_keeps_order_and_entries(self, queue):
        for payload in ["first", "second", "third"]:
            queue.push(payload)

        assert queue.drain_view() == ["first", "second", "third"]
        assert queue.drain_view() == ["first", "second", "third"]
        assert queue.size() == 3

    def test_drain_view_is_a_copy(self, queue):
        queue.push("a")
        view = queue.drain_view()
        view.append("b")
        assert queue.drain_view() == ["a"]

    def test_pop_oldest_is_fifo(self, queue):
        queue.push("a")
        queue.push("b")
        assert queue.pop_oldest() == "a"
        assert queue.pop_oldest() == "b"
        assert queue.pop_oldest() is None

    def test_clear(self, queue, logger):
        queue.push("a")
        queue.push("b")
        queue.clear()
        assert queue.size() == 0
        assert queue.drain_view() == []
        assert "Image queue cleared (was 2 images)" in logger.messages("info")

    def test_info_empty(self, queue):
        info = queue.info()
        assert info.count == 0
        assert info.is_empty is True
        assert info.oldest_timestamp is None

    def test_info_reports_oldest_timestamp(self, queue):
        queue.push("a")
        queue.push("b")
        info = queue.info()
        assert info.count == 2
        assert info.is_empty is False
        assert info.oldest_timestamp == 1000
