"""
Excepciones personalizadas del servidor de automatizacion.
"""
from tauri_automation.shared.exceptions.base import AutomationError
from tauri_automation.shared.exceptions.driver import (
    SessionStateError,
    AlreadyRunningError,
    NotRunningError,
    MissingAppPathError,
    LaunchFailedError,
    InvalidSelectorStrategyError,
    ElementNotFoundError,
    WaitTimeoutError,
    NavigationTimeoutError,
    ScreenshotTimeoutError,
    CommandExecutionFailedError,
    ScriptExecutionFailedError,
)


__all__ = [
    "AutomationError",
    "SessionStateError",
    "AlreadyRunningError",
    "NotRunningError",
    "MissingAppPathError",
    "LaunchFailedError",
    "InvalidSelectorStrategyError",
    "ElementNotFoundError",
    "WaitTimeoutError",
    "NavigationTimeoutError",
    "ScreenshotTimeoutError",
    "CommandExecutionFailedError",
    "ScriptExecutionFailedError",
]
