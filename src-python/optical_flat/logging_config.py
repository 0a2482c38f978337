"""
Copyright 2026 optical-flat authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

Logging Configuration
Sets up the 'optical_flat' logger tree.

Modules log under their own names (optical_flat.core.simulator,
optical_flat.ui.controls, ...). Records are printed with the package prefix
stripped, and single modules can be given their own level, e.g. to follow
every recompute of the engine without the rest of the package at DEBUG.
"""
import logging
import sys
from typing import Dict, Optional, Union

PACKAGE_LOGGER = __name__.rpartition('.')[0] or __name__

LOG_FORMAT = '%(asctime)s %(levelname)-7s [%(module_path)s] %(message)s'
LOG_DATEFMT = '%H:%M:%S'

Level = Union[int, str]


class _ModulePathFilter(logging.Filter):
    """Adds record.module_path: the logger name relative to the package."""

    def filter(self, record: logging.LogRecord) -> bool:
        prefix = PACKAGE_LOGGER + '.'
        if record.name.startswith(prefix):
            record.module_path = record.name[len(prefix):]
        else:
            record.module_path = record.name
        return True


def _resolve_level(level: Level) -> int:
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level '{level}'")
        return resolved
    return level


def setup_logging(level: Level = logging.INFO, log_file: Optional[str] = None,
                  module_levels: Optional[Dict[str, Level]] = None) -> logging.Logger:
    """
    Configures the logger for the 'optical_flat' namespace.

    Args:
        level: Package logging level, as a number or a name ('DEBUG', 'info')
        log_file: Optional path to save logs to a file.
        module_levels: Per-module overrides keyed by the module path inside
            the package, e.g. {'core.simulator': 'DEBUG'}.

    Returns:
        The configured package logger.

    Raises:
        ValueError: If a level name is not a logging level.
    """
    package_level = _resolve_level(level)
    overrides = {name: _resolve_level(lvl) for name, lvl in (module_levels or {}).items()}

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(package_level)

    # Calling again replaces the handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    module_filter = _ModulePathFilter()

    # Handlers pass everything; the loggers decide what gets through
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(module_filter)
        logger.addHandler(handler)

    # Overrides from an earlier call do not survive a reconfiguration
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(PACKAGE_LOGGER + '.'):
            logging.getLogger(name).setLevel(logging.NOTSET)
    for name, module_level in overrides.items():
        logging.getLogger(f'{PACKAGE_LOGGER}.{name}').setLevel(module_level)

    logger.debug(f"Logging initialized at {logging.getLevelName(package_level)}"
                 + (f" with overrides {overrides}" if overrides else ""))
    return logger
