from __future__ import annotations

import importlib
import io
import logging
from typing import Iterator

import pytest

import index_minpq.logger as impq_logger
from index_minpq.index_min_pq import IndexMinPQ


@pytest.fixture
def fresh_logger(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    monkeypatch.delenv("IMPQ_LOG_LEVEL", raising=False)
    yield monkeypatch
    monkeypatch.delenv("IMPQ_LOG_LEVEL", raising=False)
    importlib.reload(impq_logger)


def test_env_var_sets_package_level(fresh_logger: pytest.MonkeyPatch) -> None:
    fresh_logger.setenv("IMPQ_LOG_LEVEL", "debug")
    importlib.reload(impq_logger)
    assert logging.getLogger("index_minpq").level == logging.DEBUG
    assert impq_logger.init_logger("index_minpq.index_min_pq").isEnabledFor(logging.DEBUG)


def test_default_level_is_warning(fresh_logger: pytest.MonkeyPatch) -> None:
    importlib.reload(impq_logger)
    assert logging.getLogger("index_minpq").level == logging.WARNING


def test_reload_keeps_a_single_handler(fresh_logger: pytest.MonkeyPatch) -> None:
    importlib.reload(impq_logger)
    importlib.reload(impq_logger)
    assert logging.getLogger("index_minpq").handlers == [impq_logger._default_handler]


def test_init_logger_outside_package_gets_shared_handler(fresh_logger: pytest.MonkeyPatch) -> None:
    importlib.reload(impq_logger)
    logger = impq_logger.init_logger("tests.script_logger_handler")
    assert impq_logger._default_handler in logger.handlers
    assert not logger.propagate
    assert logger.level == logging.WARNING
    impq_logger.init_logger("tests.script_logger_handler")
    assert logger.handlers.count(impq_logger._default_handler) == 1


def test_set_log_level_reaches_script_logger(fresh_logger: pytest.MonkeyPatch) -> None:
    importlib.reload(impq_logger)
    script_logger = impq_logger.init_logger("tests.script_logger_level")
    assert not script_logger.isEnabledFor(logging.DEBUG)

    impq_logger.set_log_level("DEBUG")
    assert script_logger.level == logging.DEBUG
    assert logging.getLogger("index_minpq").level == logging.DEBUG

    impq_logger.set_log_level(logging.ERROR)
    assert script_logger.level == logging.ERROR


def test_queue_debug_messages_use_shared_handler(fresh_logger: pytest.MonkeyPatch) -> None:
    importlib.reload(impq_logger)
    stream = io.StringIO()
    impq_logger._default_handler.setStream(stream)  # type: ignore[union-attr]
    impq_logger.set_log_level("DEBUG")

    pq: IndexMinPQ[int] = IndexMinPQ(3)
    pq.insert(1, 4)
    list(pq)

    output = stream.getvalue()
    assert "Created IndexMinPQ with capacity 3" in output
    assert "Iterating over a snapshot of 1 indices" in output
    assert "DEBUG" in output
