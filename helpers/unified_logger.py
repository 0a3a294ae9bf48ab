"""
Unified logging for the grid deployer.

Provides consistent, colored logging across all components:
- Strategy configuration and calculations
- Gateway and transaction services
- Deployment orchestration
- Core utilities

Based on loguru with component-specific context bound to every record.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger as _logger

from deploy_config.settings import get_settings


_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component_id]: <32}</cyan> | "
    "<level>{message}</level>"
)

_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level:<8} | "
    "{extra[component_id]:<32} | "
    "{message}"
)


def _ensure_component(record) -> bool:
    if "component_id" not in record["extra"]:
        record["extra"]["component_id"] = "UNKNOWN"
    return True


def _file_logging_enabled() -> bool:
    flag = os.getenv("LOG_TO_FILE")
    if flag is not None:
        return flag.strip().lower() in ("1", "true", "yes")
    return get_settings().log_to_file


class UnifiedLogger:
    """
    Logger bound to a single component.

    Features:
    - Shared colored console sink (installed once per process)
    - Optional session log file under ``LOG_DIR`` (``LOG_TO_FILE=true`` or settings)
    - Component identifier (``TYPE:NAME:key=value``) on every record
    """

    def __init__(
        self,
        component_type: str,  # "core", "strategy", "service", "deployment"
        component_name: str,
        context: Optional[Dict[str, Any]] = None,
        log_to_console: bool = True,
        log_level: str = "INFO",
    ):
        self.component_type = component_type.upper()
        self.component_name = component_name.upper()
        self.context = context or {}
        self.log_level = log_level.upper()

        self.component_id = f"{self.component_type}:{self.component_name}"
        if self.context:
            context_str = ":".join(f"{k}={v}" for k, v in self.context.items())
            self.component_id = f"{self.component_id}:{context_str}"

        self._setup_sinks(log_to_console)
        self._logger = _logger.bind(component_id=self.component_id)

    def _setup_sinks(self, log_to_console: bool) -> None:
        """Install the shared sinks the first time any component logger is built."""
        if not hasattr(_logger, "_grid_deployer_console_setup"):
            _logger.remove()
            if log_to_console:
                _logger.add(
                    sys.stderr,
                    format=_CONSOLE_FORMAT,
                    level=self.log_level,
                    colorize=True,
                    filter=_ensure_component,
                    backtrace=True,
                    diagnose=False,
                )
            _logger._grid_deployer_console_setup = True

        if _file_logging_enabled() and not hasattr(_logger, "_grid_deployer_file_setup"):
            logs_dir = Path(os.getenv("LOG_DIR", "logs"))
            logs_dir.mkdir(parents=True, exist_ok=True)
            session_ts = datetime.now().strftime("%Y%m%d_%H%M%S")
            _logger.add(
                str(logs_dir / f"session_{session_ts}.log"),
                format=_FILE_FORMAT,
                level="DEBUG",
                filter=_ensure_component,
                backtrace=False,
                diagnose=False,
                enqueue=True,
                catch=True,
            )
            _logger._grid_deployer_file_setup = True

    def debug(self, message: str, **kwargs):
        self._logger.opt(depth=1).debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        self._logger.opt(depth=1).info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._logger.opt(depth=1).warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        self._logger.opt(depth=1).error(message, **kwargs)

    def exception(self, message: str, **kwargs):
        self._logger.opt(depth=1, exception=True).error(message, **kwargs)

    def log(self, message: str, level: str = "INFO", **kwargs):
        """
        Log at a level given by name.

        Args:
            message: Log message
            level: DEBUG, INFO, WARNING, ERROR or CRITICAL (unknown names log at INFO)
        """
        level = level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            level = "INFO"
        self._logger.opt(depth=1).log(level, message, **kwargs)

    def log_transaction(self, phase: str, to_address: str, tx_hash: Optional[str], status: str):
        """Log a submitted transaction with structured fields."""
        self._logger.opt(depth=1).info(
            f"TRANSACTION: {phase.upper()} -> {to_address} | Hash: {tx_hash or '-'} | Status: {status}",
            phase=phase,
            to_address=to_address,
            tx_hash=tx_hash,
            status=status,
            transaction=True,
        )

    def with_context(self, **context) -> "UnifiedLogger":
        """Return a logger for the same component with extra context merged in."""
        return UnifiedLogger(
            component_type=self.component_type.lower(),
            component_name=self.component_name.lower(),
            context={**self.context, **context},
            log_level=self.log_level,
        )


def get_logger(
    component_type: str,
    component_name: str,
    context: Optional[Dict[str, Any]] = None,
    log_to_console: bool = True,
    log_level: Optional[str] = None,
) -> UnifiedLogger:
    """
    Factory for component loggers.

    Examples:
        logger = get_logger("strategy", "grid")
        logger = get_logger("deployment", "orchestrator", {"network": "flare"})
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL") or get_settings().log_level

    return UnifiedLogger(
        component_type=component_type,
        component_name=component_name,
        context=context,
        log_to_console=log_to_console,
        log_level=log_level,
    )


def get_strategy_logger(strategy_name: str, **context) -> UnifiedLogger:
    """Get logger for strategy configuration and calculations."""
    return get_logger("strategy", strategy_name, context)


def get_service_logger(service_name: str, **context) -> UnifiedLogger:
    """Get logger for gateway, wallet and transaction services."""
    return get_logger("service", service_name, context)


def get_deployment_logger(name: str, **context) -> UnifiedLogger:
    """Get logger for the deployment state machine and session."""
    return get_logger("deployment", name, context)


def get_core_logger(module_name: str, **context) -> UnifiedLogger:
    """Get logger for core utilities."""
    return get_logger("core", module_name, context)


def log_stage(
    logger_obj: Any,
    title: str,
    *,
    icon: Optional[str] = None,
    stage_id: Optional[str] = None,
    border: str = "=",
    width: int = 55,
    level: str = "INFO",
) -> None:
    """
    Log a separator banner to highlight a deployment phase.

    Works with UnifiedLogger instances and raw loguru loggers.
    """
    def _emit(message: str) -> None:
        normalized_level = level.upper()
        if isinstance(logger_obj, UnifiedLogger):
            logger_obj.log(message, level=normalized_level)
        else:
            logger_obj.log(normalized_level, message)

    label_parts = []
    if stage_id:
        label_parts.append(f"{stage_id}.")
    if icon:
        label_parts.append(icon)
    label_parts.append(title)

    border_line = border * width
    _emit(border_line)
    _emit(" ".join(label_parts))
    _emit(border_line)
