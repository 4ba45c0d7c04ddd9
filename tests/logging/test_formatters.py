import json
import logging.handlers

import pytest

from dokit._cogs.structs.references import ACCOUNT, volume
from dokit._core.engines.loggers import LogFormat, ResourceJsonFormatter, ResourceLogger, \
                                        ResourcePrefixingJsonFormatter, \
                                        ResourcePrefixingTextFormatter, ResourceTextFormatter, \
                                        make_formatter


@pytest.fixture()
def handler():
    handler = logging.handlers.BufferingHandler(capacity=100)
    logger = logging.getLogger('dokit.actions')
    logger.addHandler(handler)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)


@pytest.fixture()
def resource_record(handler):
    logger = ResourceLogger(scope=volume('v1'), action_id=9)
    logger.warning("hello")
    return handler.buffer[0]


@pytest.fixture()
def account_record(handler):
    logger = ResourceLogger(scope=ACCOUNT)
    logger.warning("hello")
    return handler.buffer[0]


def test_prefixing_text_formatter_adds_prefixes_with_actions(resource_record):
    formatter = ResourcePrefixingTextFormatter()
    formatted = formatter.format(resource_record)
    assert formatted == '[volumes/v1#9] hello'


def test_prefixing_text_formatter_adds_prefixes_without_actions(account_record):
    formatter = ResourcePrefixingTextFormatter()
    formatted = formatter.format(account_record)
    assert formatted == '[account] hello'


def test_prefixing_does_not_modify_the_record(resource_record):
    formatter = ResourcePrefixingTextFormatter()
    formatter.format(resource_record)
    assert resource_record.msg == 'hello'


def test_text_formatter_does_not_add_prefixes(resource_record):
    formatter = ResourceTextFormatter()
    formatted = formatter.format(resource_record)
    assert formatted == 'hello'


def test_json_formatter_adds_references(resource_record):
    formatter = ResourceJsonFormatter()
    formatted = formatter.format(resource_record)
    decoded = json.loads(formatted)
    assert decoded['message'] == 'hello'
    assert decoded['severity'] == 'warn'
    assert decoded['resource'] == {
        'scope': 'volumes/v1',
        'resource_type': 'volumes',
        'resource_id': 'v1',
        'action_id': 9,
    }
    assert 'do_ref' not in decoded
    assert 'timestamp' in decoded


def test_json_formatter_with_custom_refkey(resource_record):
    formatter = ResourceJsonFormatter(refkey='ref')
    decoded = json.loads(formatter.format(resource_record))
    assert decoded['ref']['action_id'] == 9
    assert 'resource' not in decoded


def test_prefixing_json_formatter_adds_prefixes(resource_record):
    formatter = ResourcePrefixingJsonFormatter()
    decoded = json.loads(formatter.format(resource_record))
    assert decoded['message'] == '[volumes/v1#9] hello'


def test_extras_are_merged_with_the_references(handler):
    logger = ResourceLogger(scope=volume('v1'), action_id=9)
    logger.warning("hello", extra={'more': 'info'})
    record = handler.buffer[0]
    assert record.more == 'info'
    assert record.do_ref['action_id'] == 9


@pytest.mark.parametrize('log_format, log_prefix, expected_cls', [
    (LogFormat.PLAIN, None, ResourcePrefixingTextFormatter),
    (LogFormat.FULL, None, ResourcePrefixingTextFormatter),
    (LogFormat.JSON, None, ResourceJsonFormatter),
    (LogFormat.PLAIN, False, ResourceTextFormatter),
    (LogFormat.JSON, True, ResourcePrefixingJsonFormatter),
    ('%(message)s', True, ResourcePrefixingTextFormatter),
    ('%(message)s', False, ResourceTextFormatter),
])
def test_formatter_making(log_format, log_prefix, expected_cls):
    formatter = make_formatter(log_format=log_format, log_prefix=log_prefix)
    assert type(formatter) is expected_cls


def test_formatter_making_fails_on_unknown_formats():
    with pytest.raises(ValueError):
        make_formatter(log_format=123)


@pytest.mark.parametrize('log_format, value', [
    (LogFormat.PLAIN, '%(message)s'),
    (LogFormat.JSON, 'json'),
])
def test_log_formats_have_explicit_values(log_format, value):
    assert log_format.value == value
    assert LogFormat(value) is log_format
