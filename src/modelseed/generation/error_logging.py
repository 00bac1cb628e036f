"""Error logging utilities for record generation."""

import traceback
from typing import Any, Optional, Dict
from modelseed.config.logging import get_logger

logger = get_logger(__name__)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
    operation: Optional[str] = None,
    model_name: Optional[str] = None,
    field_name: Optional[str] = None,
    log_level: str = "error",
) -> None:
    """
    Log an error with its type, message, context, and traceback.

    Args:
        error: The exception that occurred
        context: Additional context dictionary (e.g., {'count': 5})
        operation: Description of the operation being performed
        model_name: Name of the model being generated
        field_name: Name of the field involved
        log_level: Logging level ('error', 'warning', 'critical')
    """
    error_type = type(error).__name__

    context_parts = []
    if operation:
        context_parts.append(f"Operation: {operation}")
    if model_name:
        context_parts.append(f"Model: {model_name}")
    if field_name:
        context_parts.append(f"Field: {field_name}")
    if context:
        context_parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))

    error_msg = f"[{error_type}] {error}"
    if context_parts:
        error_msg += " | " + " | ".join(context_parts)

    level = log_level.lower()
    if level == "critical":
        logger.critical(error_msg, exc_info=error)
    elif level == "warning":
        logger.warning(error_msg, exc_info=error)
    else:
        logger.error(error_msg, exc_info=error)

    logger.debug(
        f"Full traceback for {error_type}:\n"
        + "".join(traceback.format_exception(type(error), error, error.__traceback__))
    )


def log_error_with_recovery(
    error: Exception,
    recovery_action: str,
    context: Optional[Dict[str, Any]] = None,
    operation: Optional[str] = None,
    model_name: Optional[str] = None,
    field_name: Optional[str] = None,
) -> None:
    """
    Log an error and the recovery action taken.

    Args:
        error: The exception that occurred
        recovery_action: Description of how the error was handled/recovered
        context: Additional context dictionary
        operation: Description of the operation being performed
        model_name: Name of the model being generated
        field_name: Name of the field involved
    """
    log_error(
        error=error,
        context=context,
        operation=operation,
        model_name=model_name,
        field_name=field_name,
        log_level="warning",
    )
    logger.warning(f"Recovery action: {recovery_action}")
