"""
DTOs de la capa de aplicacion.
"""
from tauri_automation.application.dto.tool_dto import (
    ToolResponse,
    LaunchAppDTO,
    ScreenshotDTO,
    ElementSelectorDTO,
    TypeTextDTO,
    WaitForElementDTO,
    WaitForNavigationDTO,
    ExecuteTauriCommandDTO,
    ExecuteScriptDTO,
)

__all__ = [
    "ToolResponse",
    "LaunchAppDTO",
    "ScreenshotDTO",
    "ElementSelectorDTO",
    "TypeTextDTO",
    "WaitForElementDTO",
    "WaitForNavigationDTO",
    "ExecuteTauriCommandDTO",
    "ExecuteScriptDTO",
]
