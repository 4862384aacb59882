"""
Excepciones del driver de automatización.

Todas son fallos locales y recuperables: el driver las lanza y la capa
de herramientas las convierte en la respuesta {success: false, error}.
"""
from typing import Any, Optional

from tauri_automation.shared.exceptions.base import AutomationError


def _describe(cause: Any) -> str:
    """Texto legible de la causa original de un error."""
    text = str(cause)
    return text if text else type(cause).__name__


class SessionStateError(AutomationError):
    """Excepción base para violaciones de precondiciones de la sesión."""


class AlreadyRunningError(SessionStateError):
    """Excepción cuando se intenta lanzar con una sesión ya activa."""

    def __init__(self):
        super().__init__(
            message="La aplicacion ya esta en ejecucion. Cierrala primero.",
            error_code="ALREADY_RUNNING"
        )


class NotRunningError(SessionStateError):
    """Excepción cuando se opera sin una sesión activa."""

    def __init__(self):
        super().__init__(
            message="No hay ninguna aplicacion en ejecucion. Lanza una aplicacion primero.",
            error_code="NOT_RUNNING"
        )


class MissingAppPathError(SessionStateError):
    """Excepción cuando no hay ruta de aplicación ni en parámetros ni en configuración."""

    def __init__(self):
        super().__init__(
            message="Se requiere la ruta de la aplicacion",
            error_code="MISSING_APP_PATH"
        )


class LaunchFailedError(AutomationError):
    """Excepción cuando no se pudo establecer la sesión WebDriver."""

    def __init__(self, cause: Any):
        self.cause = cause
        super().__init__(
            message=f"No se pudo lanzar la aplicacion: {_describe(cause)}",
            error_code="LAUNCH_FAILED",
            details={"cause": _describe(cause)}
        )


class InvalidSelectorStrategyError(AutomationError):
    """Excepción cuando la estrategia de selector no es reconocida."""

    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(
            message=f"Estrategia de selector no soportada: {strategy}",
            error_code="INVALID_SELECTOR_STRATEGY",
            details={"strategy": strategy}
        )


class ElementNotFoundError(AutomationError):
    """Excepción cuando no existe ningún elemento que coincida con el selector."""

    def __init__(self, selector: str, strategy: str):
        self.selector = selector
        self.strategy = strategy
        super().__init__(
            message=f"Elemento no encontrado ({strategy}): {selector}",
            error_code="ELEMENT_NOT_FOUND",
            details={"selector": selector, "strategy": strategy}
        )


class WaitTimeoutError(AutomationError):
    """Excepción cuando un elemento no aparece dentro del timeout."""

    def __init__(self, selector: str, timeout: int, strategy: str = "css"):
        self.selector = selector
        self.timeout = timeout
        self.strategy = strategy
        super().__init__(
            message=f"Elemento no encontrado en {timeout}ms ({strategy}): {selector}",
            error_code="WAIT_TIMEOUT",
            details={"selector": selector, "timeout": timeout, "strategy": strategy}
        )


class NavigationTimeoutError(AutomationError):
    """Excepción cuando la URL no cambia dentro del timeout."""

    def __init__(self, timeout: int, url_contains: Optional[str] = None, start_url: Optional[str] = None):
        self.timeout = timeout
        self.url_contains = url_contains
        self.start_url = start_url
        if url_contains:
            message = f'La URL no cambio a una que contenga "{url_contains}" en {timeout}ms'
        else:
            message = f'La URL no cambio desde "{start_url}" en {timeout}ms'
        super().__init__(
            message=message,
            error_code="NAVIGATION_TIMEOUT",
            details={"timeout": timeout, "url_contains": url_contains, "start_url": start_url}
        )


class ScreenshotTimeoutError(AutomationError):
    """Excepción cuando la captura no responde dentro del timeout."""

    def __init__(self, timeout: int):
        self.timeout = timeout
        super().__init__(
            message=f"La captura de pantalla excedio el timeout de {timeout}ms",
            error_code="SCREENSHOT_TIMEOUT",
            details={"timeout": timeout}
        )


class CommandExecutionFailedError(AutomationError):
    """Excepción cuando falla un comando IPC de Tauri."""

    def __init__(self, name: str, cause: Any):
        self.name = name
        self.cause = cause
        super().__init__(
            message=f"Fallo la ejecucion del comando Tauri '{name}': {_describe(cause)}",
            error_code="COMMAND_EXECUTION_FAILED",
            details={"command": name, "cause": _describe(cause)}
        )


class ScriptExecutionFailedError(AutomationError):
    """Excepción cuando falla un script ejecutado en el contexto de la aplicación."""

    def __init__(self, cause: Any):
        self.cause = cause
        super().__init__(
            message=f"Fallo la ejecucion del script: {_describe(cause)}",
            error_code="SCRIPT_EXECUTION_FAILED",
            details={"cause": _describe(cause)}
        )
