"""
===============================================================================
LOGGING - Verification
===============================================================================

1. setup_logging() configures the package logger without duplicate handlers
2. Level names and per-module level overrides
3. Records carry the module path inside the package
4. The entry placement fallback and rejected inputs are logged

USAGE
-----
    pytest developer_tests/test_logging.py -v
===============================================================================
"""

import sys
import logging
from pathlib import Path

src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

import pytest

from optical_flat.logging_config import setup_logging
from optical_flat.core.scene import Scene
from optical_flat.core.simulator import Simulator, compute_ray_path
from optical_flat.ui.controls import PairedControl


def test_setup_logging_is_idempotent(tmp_path):
    log_file = tmp_path / 'run.log'
    setup_logging(logging.DEBUG)
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    assert logger.name == 'optical_flat'
    assert len(logger.handlers) == 2
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()
    assert 'hello' in log_file.read_text(encoding='utf-8')

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_fallback_placement_is_logged(caplog):
    with caplog.at_level(logging.INFO, logger='optical_flat'):
        path = compute_ray_path(1.5, 5.0, Scene(width=2000, height=300))
    assert path.placement == 'fallback'
    assert any('fallback' in r.getMessage().lower() for r in caplog.records)


def test_rejected_input_is_logged(caplog):
    control = PairedControl('refractive_index', 1.5)
    with caplog.at_level(logging.WARNING, logger='optical_flat'):
        control.set_from_number('abc')
    assert any(r.levelno == logging.WARNING and 'abc' in r.getMessage()
               for r in caplog.records)


def test_level_names_and_module_overrides():
    logger = setup_logging('warning', module_levels={'core.simulator': 'DEBUG'})
    try:
        assert logger.level == logging.WARNING
        simulator_logger = logging.getLogger('optical_flat.core.simulator')
        assert simulator_logger.getEffectiveLevel() == logging.DEBUG
        assert logging.getLogger('optical_flat.ui.controls').getEffectiveLevel() == logging.WARNING

        # A later call without overrides drops them
        setup_logging(logging.INFO)
        assert simulator_logger.getEffectiveLevel() == logging.INFO
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


def test_unknown_level_name_is_rejected():
    with pytest.raises(ValueError):
        setup_logging('LOUD')


def test_records_show_module_path(tmp_path):
    log_file = tmp_path / 'engine.log'
    logger = setup_logging(logging.INFO, log_file=str(log_file),
                           module_levels={'core.simulator': logging.DEBUG})
    try:
        Simulator().run(1.5, 5.0)
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding='utf-8')
        assert '[core.simulator]' in text
        assert 'optical_flat.core.simulator' not in text
        assert 'shift=1.646mm' in text
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        setup_logging(logging.INFO)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
