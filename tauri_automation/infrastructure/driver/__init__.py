"""
Modulo de gestion del driver WebDriver.
Proporciona el TauriDriver y las utilidades del transporte.
"""
from tauri_automation.infrastructure.driver.selectors import (
    SELECTOR_STRATEGIES,
    SelectorStrategy,
    locator_for,
    resolve_selector,
)
from tauri_automation.infrastructure.driver.tauri_driver import TauriDriver


__all__ = [
    "TauriDriver",
    "SelectorStrategy",
    "SELECTOR_STRATEGIES",
    "resolve_selector",
    "locator_for"
]
