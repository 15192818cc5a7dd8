import logging

import numpy as np
from environs import Env

from repeater_los.log_filters import TruncatingFilter
from repeater_los.logging_config import _resolve_level


def make_record(msg, args=()):
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


def test_ndarray_args_are_summarised():
    record = make_record("elevations %s", (np.array([100.0, 250.5, 180.0]),))
    TruncatingFilter().filter(record)

    assert record.getMessage() == "elevations <ndarray shape=(3,) min=100.00 max=250.50>"


def test_long_args_are_truncated():
    record = make_record("url %s", ("x" * 500,))
    TruncatingFilter(max_length=20).filter(record)

    assert record.getMessage() == "url " + "x" * 20 + "..."


def test_long_messages_are_truncated():
    record = make_record("y" * 300)
    assert TruncatingFilter(max_length=100).filter(record)

    assert record.msg == "y" * 100 + "..."


def test_short_messages_untouched():
    record = make_record("ok %d", (5,))
    TruncatingFilter().filter(record)
    assert record.getMessage() == "ok 5"


def test_resolve_level(monkeypatch):
    monkeypatch.setenv("LOGGING_LEVEL", "warning")
    monkeypatch.delenv("DEBUG", raising=False)
    assert _resolve_level(Env(), verbose=False) == logging.WARNING
    assert _resolve_level(Env(), verbose=True) == logging.DEBUG

    monkeypatch.setenv("DEBUG", "true")
    assert _resolve_level(Env(), verbose=False) == logging.DEBUG
