"""
tests/core/parallel/test_parallel_support.py - 취소 컨텍스트, quiet 모드, 실패 분류 테스트
"""

import logging
import threading
import time

import pytest

from conftest import create_mock_client_error
from core.exceptions import CollectionCancelledError
from core.parallel import (
    CollectionContext,
    ErrorCategory,
    categorize_error,
    categorize_error_code,
    get_error_code,
    inherit_quiet_state,
    is_quiet,
    quiet_mode,
    set_quiet,
    summarize_failures,
)


class TestCollectionContext:
    def test_not_cancelled(self):
        ctx = CollectionContext()
        assert not ctx.cancelled
        assert ctx.reason == ""
        assert ctx.remaining is None
        ctx.raise_if_cancelled()

    def test_cancel(self):
        ctx = CollectionContext()
        ctx.cancel("interrupted")
        ctx.cancel("second")
        assert ctx.cancelled
        assert ctx.reason == "interrupted"
        with pytest.raises(CollectionCancelledError):
            ctx.raise_if_cancelled()

    def test_deadline(self):
        ctx = CollectionContext(timeout=0.01)
        time.sleep(0.03)
        assert ctx.cancelled
        assert ctx.reason == "deadline exceeded"
        assert ctx.remaining == 0.0

    def test_cancel_from_other_thread(self):
        ctx = CollectionContext()
        t = threading.Thread(target=ctx.cancel)
        t.start()
        t.join()
        assert ctx.cancelled


class TestQuietMode:
    """quiet_mode / is_quiet"""

    def test_context_restores(self):
        set_quiet(False)
        with quiet_mode():
            assert is_quiet()
            assert inherit_quiet_state()
        assert not is_quiet()

    def test_thread_local(self):
        seen = {}

        def worker():
            seen["thread"] = is_quiet()

        with quiet_mode():
            t = threading.Thread(target=worker)
            t.start()
            t.join()
        assert seen["thread"] is False

    def test_filter_blocks_info(self, caplog):
        logger = logging.getLogger("invc.test.quiet")
        with caplog.at_level(logging.INFO):
            with quiet_mode():
                logger.info("숨김")
                logger.error("표시")
            logger.info("다시 표시")
        messages = [r.getMessage() for r in caplog.records]
        assert "숨김" not in messages
        assert "표시" in messages
        assert "다시 표시" in messages

    def test_nested(self):
        with quiet_mode():
            with quiet_mode():
                assert is_quiet()
            assert is_quiet()
        assert not is_quiet()


class TestErrorCategorization:
    @pytest.mark.parametrize(
        "code,expected",
        [
            ("AccessDeniedException", ErrorCategory.ACCESS_DENIED),
            ("ResourceNotFoundException", ErrorCategory.NOT_FOUND),
            ("ThrottlingException", ErrorCategory.THROTTLING),
            ("ExpiredTokenException", ErrorCategory.EXPIRED_TOKEN),
            ("ValidationException", ErrorCategory.INVALID_REQUEST),
            ("InternalFailure", ErrorCategory.SERVICE_ERROR),
            ("Mystery", ErrorCategory.UNKNOWN),
        ],
    )
    def test_code(self, code, expected):
        assert categorize_error_code(code) == expected

    def test_client_error(self):
        err = create_mock_client_error("AccessDenied")
        assert categorize_error(err) == ErrorCategory.ACCESS_DENIED
        assert get_error_code(err) == "AccessDenied"

    def test_cancelled(self):
        assert categorize_error(CollectionCancelledError()) == ErrorCategory.CANCELLED

    def test_network(self):
        assert categorize_error(ConnectionError("reset")) == ErrorCategory.NETWORK

    def test_plain_exception_code(self):
        assert get_error_code(RuntimeError("x")) == "RuntimeError"

    def test_summarize_sorted(self):
        infos = summarize_failures({"vpc": RuntimeError("a"), "ec2": create_mock_client_error("Throttling")})
        assert [i.category for i in infos] == ["ec2", "vpc"]
        assert infos[0].error_category == ErrorCategory.THROTTLING
        assert infos[1].to_dict()["error_code"] == "RuntimeError"
