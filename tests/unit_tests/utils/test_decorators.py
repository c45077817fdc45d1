import logging

import pytest

from images_api.utils.decorators import log_execution_time


def test_logs_duration_of_sync_call(caplog):
    @log_execution_time
    def add(a, b):
        return a + b

    with caplog.at_level(logging.INFO, logger="images_api.utils.decorators"):
        assert add(1, 2) == 3

    assert "add completed in" in caplog.text
    assert add.__name__ == "add"


async def test_logs_duration_of_async_call_with_label(caplog):
    @log_execution_time(label="store image")
    async def store():
        return "stored"

    with caplog.at_level(logging.INFO, logger="images_api.utils.decorators"):
        assert await store() == "stored"

    assert "store image completed in" in caplog.text


async def test_logs_and_reraises_failures(caplog):
    @log_execution_time
    async def broken():
        raise RuntimeError("bucket gone")

    with caplog.at_level(logging.INFO, logger="images_api.utils.decorators"):
        with pytest.raises(RuntimeError, match="bucket gone"):
            await broken()

    assert "failed after" in caplog.text
    assert "bucket gone" in caplog.text
