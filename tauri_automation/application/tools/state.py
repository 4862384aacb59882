"""
Herramientas de estado de la pagina y ejecucion de comandos.
"""
from tauri_automation.application.dto import ExecuteScriptDTO, ExecuteTauriCommandDTO, ToolResponse
from tauri_automation.infrastructure.driver import TauriDriver


async def execute_tauri_command(driver: TauriDriver, params: ExecuteTauriCommandDTO) -> ToolResponse:
    """Ejecuta un comando IPC de Tauri."""
    try:
        result = await driver.execute_command(params.command, params.args)
        return ToolResponse.ok({"result": result})
    except Exception as e:
        return ToolResponse.fail(e)


async def execute_script(driver: TauriDriver, params: ExecuteScriptDTO) -> ToolResponse:
    """Ejecuta JavaScript arbitrario en la aplicacion."""
    try:
        result = await driver.execute_script(params.script, params.args)
        return ToolResponse.ok({"result": result})
    except Exception as e:
        return ToolResponse.fail(e)


async def get_page_title(driver: TauriDriver) -> ToolResponse:
    """Titulo de la pagina actual."""
    try:
        return ToolResponse.ok({"title": await driver.get_title()})
    except Exception as e:
        return ToolResponse.fail(e)


async def get_page_url(driver: TauriDriver) -> ToolResponse:
    """URL de la pagina actual."""
    try:
        return ToolResponse.ok({"url": await driver.get_url()})
    except Exception as e:
        return ToolResponse.fail(e)
