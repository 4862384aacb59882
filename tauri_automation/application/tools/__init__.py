"""
Herramientas de automatizacion.

Cada funcion recibe el driver y un DTO de parametros, y retorna siempre
un ToolResponse: los errores del driver se convierten en {success: false}.
"""
from tauri_automation.application.tools.launch import launch_app, close_app, get_app_state
from tauri_automation.application.tools.screenshot import capture_screenshot
from tauri_automation.application.tools.interact import (
    click_element,
    type_text,
    wait_for_element,
    wait_for_navigation,
    get_element_text,
)
from tauri_automation.application.tools.state import (
    execute_tauri_command,
    execute_script,
    get_page_title,
    get_page_url,
)

__all__ = [
    "launch_app",
    "close_app",
    "get_app_state",
    "capture_screenshot",
    "click_element",
    "type_text",
    "wait_for_element",
    "wait_for_navigation",
    "get_element_text",
    "execute_tauri_command",
    "execute_script",
    "get_page_title",
    "get_page_url",
]
