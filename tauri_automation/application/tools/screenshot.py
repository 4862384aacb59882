"""
Herramientas de captura de pantalla.
"""
from loguru import logger

from tauri_automation.application.dto import ScreenshotDTO, ToolResponse
from tauri_automation.infrastructure.driver import TauriDriver


async def capture_screenshot(driver: TauriDriver, params: ScreenshotDTO) -> ToolResponse:
    """
    Captura la ventana de la aplicacion.

    Con return_base64 el resultado trae 'base64'; si no, 'path' del PNG guardado.
    """
    try:
        result = await driver.capture_screenshot(params.filename, params.return_base64, params.timeout)
    except Exception as e:
        logger.warning(f"capture_screenshot fallo: {e}")
        return ToolResponse.fail(e)

    if params.return_base64:
        return ToolResponse.ok({
            "base64": result,
            "message": "Screenshot capturado correctamente",
        })
    return ToolResponse.ok({
        "path": result,
        "message": f"Screenshot guardado en: {result}",
    })
