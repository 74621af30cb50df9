"""Tests for the result type, the DI container and the logger services."""

import logging

import pytest

from roilens.domain.common.di_container import DIContainer
from roilens.domain.common.errors import DomainError, ErrorCategory, ErrorCode, ResourceError
from roilens.domain.common.result import Result
from roilens.infrastructure.logging.logger_service import ConsoleLoggerService, FileLoggerService, parse_log_level


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

class TestResult:
    def test_ok(self):
        result = Result.ok(5)
        assert result.is_success
        assert result.value == 5
        with pytest.raises(ValueError):
            _ = result.error

    def test_fail_with_string(self):
        result = Result.fail("boom")
        assert result.is_failure
        assert isinstance(result.error, DomainError)
        assert result.error.category is ErrorCategory.UNKNOWN
        with pytest.raises(ValueError):
            _ = result.value

    def test_to_dict(self):
        assert Result.ok("x").to_dict("text") == {"success": True, "text": "x"}
        error = ResourceError("Could not find display source", code=ErrorCode.SOURCE_NOT_FOUND)
        assert Result.fail(error).to_dict() == {
            "success": False, "error": "Could not find display source", "code": ErrorCode.SOURCE_NOT_FOUND
        }

    def test_from_operation_wraps_exceptions(self, logger):
        def explode():
            raise OSError("disk gone")

        result = Result.from_operation(explode, logger, ResourceError, "Read failed", path="x")

        assert result.error.message == "Read failed: disk gone"
        assert result.error.details == {"path": "x"}
        assert logger.messages("error")

    def test_from_operation_passes_results_through(self, logger):
        failed = Result.fail("rate limited")
        assert Result.from_operation(lambda: failed, logger, ResourceError, "Read failed") is failed
        assert Result.from_operation(lambda: 3, logger, ResourceError, "Read failed").value == 3


# ---------------------------------------------------------------------------
# DIContainer
# ---------------------------------------------------------------------------

class Base:
    pass


class Other:
    pass


class TestDIContainer:
    def test_factory_creates_each_time(self):
        container = DIContainer()
        container.register_factory(Base, Base)
        assert container.resolve(Base) is not container.resolve(Base)

    def test_singleton_is_reused(self):
        container = DIContainer()
        container.register_singleton(Base, Base)
        assert container.resolve(Base) is container.resolve(Base)

    def test_instance(self):
        container = DIContainer()
        instance = Base()
        container.register_instance(Base, instance)
        assert container.resolve(Base) is instance
        assert container.is_registered(Base)
        assert not container.is_registered(Other)

    def test_unregistered(self):
        with pytest.raises(ValueError):
            DIContainer().resolve(Base)

    def test_circular_dependency(self):
        container = DIContainer()
        container.register_factory(Base, lambda: container.resolve(Other))
        container.register_factory(Other, lambda: container.resolve(Base))
        with pytest.raises(ValueError, match="Circular dependency"):
            container.resolve(Base)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

class TestLogging:
    @pytest.mark.parametrize("value, expected", [
        ("DEBUG", logging.DEBUG),
        ("warning", logging.WARNING),
        (logging.ERROR, logging.ERROR),
        ("chatty", logging.INFO),
    ])
    def test_parse_log_level(self, value, expected):
        assert parse_log_level(value) == expected

    def test_context_is_appended(self, caplog):
        service = ConsoleLoggerService(name="roilens-test-console")
        with caplog.at_level(logging.INFO, logger="roilens-test-console"):
            service.info("Image queued", count=3)
        assert "Image queued [count=3]" in caplog.text

    def test_file_logger_writes_dated_file(self, tmp_path):
        service = FileLoggerService(name="roilens-test-file", log_dir=str(tmp_path))
        service.warning("Capture failed", display="D")

        for handler in service.logger.handlers:
            handler.flush()
        with open(service.log_file) as f:
            assert "Capture failed [display=D]" in f.read()

    def test_file_handler_not_duplicated(self, tmp_path):
        first = FileLoggerService(name="roilens-test-dup", log_dir=str(tmp_path))
        FileLoggerService(name="roilens-test-dup", log_dir=str(tmp_path))
        file_handlers = [h for h in first.logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
