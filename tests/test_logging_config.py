"""Tests for log formatting, request id tagging and token masking."""

import io
import logging

import pytest

from common.logging_config import (
    NO_REQUEST,
    RequestIdFilter,
    SensitiveDataFilter,
    current_request_id,
    request_context,
    setup_logging,
)


@pytest.fixture
def captured_logger():
    """Logger set up by setup_logging, writing into a StringIO."""
    logger = setup_logging('redcloud_test_component', 'DEBUG')
    stream = io.StringIO()
    logger.handlers[0].setStream(stream)
    yield logger, stream
    logger.handlers.clear()


def make_record(msg, args=()):
    return logging.LogRecord('client', logging.INFO, __file__, 1, msg, args, None)


def test_request_context_sets_and_restores():
    assert current_request_id() == NO_REQUEST

    with request_context('req-1') as outer:
        assert outer == 'req-1'
        with request_context('req-2'):
            assert current_request_id() == 'req-2'
        assert current_request_id() == 'req-1'

    assert current_request_id() == NO_REQUEST


def test_request_id_filter_stamps_record():
    record = make_record("Calling getListing")

    with request_context('abc-123'):
        RequestIdFilter().filter(record)

    assert record.request_id == 'abc-123'


@pytest.mark.parametrize("message", [
    "opening block with token=s3cr3t",
    "header block_token: s3cr3t",
    "Authorization: s3cr3t",
    "sent Bearer s3cr3t",
])
def test_tokens_masked(message):
    record = make_record(message)

    SensitiveDataFilter().filter(record)

    assert 's3cr3t' not in record.getMessage()
    assert '***MASKED***' in record.getMessage()


def test_masks_format_args():
    record = make_record("delegation %s", ('token=abcdef',))

    SensitiveDataFilter().filter(record)

    assert record.getMessage() == "delegation token=***MASKED***"


def test_setup_logging_output(captured_logger):
    logger, stream = captured_logger

    logger.info("outside any request")
    with request_context('req-42'):
        logger.info("listing with token=abcdef")

    lines = stream.getvalue().splitlines()
    assert lines[0].endswith(f"- INFO - [{NO_REQUEST}] - outside any request")
    assert lines[1].endswith("- INFO - [req-42] - listing with token=***MASKED***")
    assert not logger.propagate


def test_setup_logging_is_idempotent(captured_logger):
    logger, _ = captured_logger

    again = setup_logging('redcloud_test_component', 'WARNING')

    assert again is logger
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
