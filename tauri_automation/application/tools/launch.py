"""
Herramientas de ciclo de vida: lanzar, cerrar y consultar la aplicacion.
"""
from loguru import logger

from tauri_automation.application.dto import LaunchAppDTO, ToolResponse
from tauri_automation.infrastructure.driver import TauriDriver


async def launch_app(driver: TauriDriver, params: LaunchAppDTO) -> ToolResponse:
    """Lanza la aplicacion Tauri."""
    try:
        state = await driver.launch(params.app_path, params.args, params.env)
        return ToolResponse.ok({
            "message": f"Aplicacion lanzada correctamente: {state.app_path}",
            "session_id": state.session_id,
        })
    except Exception as e:
        logger.warning(f"launch_app fallo: {e}")
        return ToolResponse.fail(e)


async def close_app(driver: TauriDriver) -> ToolResponse:
    """Cierra la aplicacion Tauri."""
    try:
        await driver.close()
        return ToolResponse.ok({"message": "Aplicacion cerrada correctamente"})
    except Exception as e:
        logger.warning(f"close_app fallo: {e}")
        return ToolResponse.fail(e)


async def get_app_state(driver: TauriDriver) -> ToolResponse:
    """
    Estado actual de la aplicacion.

    Si hay sesion activa incluye titulo y URL de la pagina; los errores
    al obtenerlos no hacen fallar la consulta.
    """
    try:
        data = driver.get_state().to_dict()
        data["page_title"] = None
        data["page_url"] = None

        if data["is_running"]:
            try:
                data["page_title"] = await driver.get_title()
                data["page_url"] = await driver.get_url()
            except Exception as e:
                logger.debug(f"No se pudo obtener informacion de la pagina: {e}")

        return ToolResponse.ok(data)
    except Exception as e:
        return ToolResponse.fail(e)
