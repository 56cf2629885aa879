"""
Centralized logging for scripts with automatic __main__ resolution.
Library modules use logging.getLogger(__name__); entry points call get_logger().
"""
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union
import sys
import os
import inspect
from fx_paths.utils.project_paths import PROJECT_ROOT, LOGS_DIR

SELF_LOGGER_NAME = "fx_paths.core.logger"

_ROOT_LOGGER_CONFIGURED = False


def _setup_root_logger():
    """Configure root logger ONCE with console handler"""
    global _ROOT_LOGGER_CONFIGURED
    if _ROOT_LOGGER_CONFIGURED:
        return

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if not any(isinstance(h, logging.StreamHandler) for h in root_logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
        root_logger.addHandler(console_handler)

    _ROOT_LOGGER_CONFIGURED = True


def _script_to_module(script_path: Path) -> str:
    """fx_paths/scripts/convert_from_config.py → fx_paths.scripts.convert_from_config"""
    try:
        rel_path = script_path.relative_to(PROJECT_ROOT.parent)
        return str(rel_path.with_suffix('')).replace(os.sep, '.')
    except ValueError:
        # Script outside project - use filename stem
        return script_path.stem


def _resolve_module_name(provided_name: str, caller_frame=None) -> str:
    """
    Resolve logger name to a dotted path, handling the __main__ case.

    Uses the caller's __file__ global first, sys.argv[0] as fallback:
      - python fx_paths/scripts/convert_from_config.py → fx_paths.scripts.convert_from_config
      - python -m fx_paths.scripts.convert_from_config → same
    """
    if provided_name != "__main__":
        return provided_name

    if caller_frame is not None and '__file__' in caller_frame.f_globals:
        return _script_to_module(Path(caller_frame.f_globals['__file__']).resolve())

    script_path = Path(sys.argv[0]).resolve()
    if sys.argv[0] and script_path.exists():
        return _script_to_module(script_path)

    logging.getLogger(SELF_LOGGER_NAME).warning(
        f"Could not resolve __main__ path. Using '__main__'. "
        f"Script may be outside project root: {PROJECT_ROOT}"
    )
    return "__main__"


def get_logger(
    module_name: str,
    log_level: int = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Get logger with a per-module rotating log file.

    Usage in entry points:
        from fx_paths.core.logger import get_logger
        logger = get_logger(__name__)

    The dotted name (minus the package prefix) maps onto the log tree:
        fx_paths.scripts.convert_from_config → <log_dir>/scripts/convert_from_config.log
    """
    _setup_root_logger()

    current_frame = inspect.currentframe()
    caller_frame = current_frame.f_back if current_frame else None
    resolved_name = _resolve_module_name(module_name, caller_frame)

    base_dir = Path(log_dir) if log_dir is not None else LOGS_DIR
    parts = resolved_name.split('.')
    if len(parts) > 1 and parts[0] == PROJECT_ROOT.name:
        parts = parts[1:]
    subdir = base_dir.joinpath(*parts[:-1]) if len(parts) > 1 else base_dir
    subdir.mkdir(parents=True, exist_ok=True)
    log_path = subdir / f"{parts[-1]}.log"

    logger = logging.getLogger(resolved_name)
    logger.setLevel(logging.DEBUG)

    # Add file handler only if not already configured
    if not any(isinstance(h, logging.handlers.RotatingFileHandler) for h in logger.handlers):
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=10_000_000,
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
