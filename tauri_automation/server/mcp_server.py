"""
Servidor MCP para automatizacion de aplicaciones Tauri.

Expone el TauriDriver como herramientas MCP sobre stdio. tauri-driver
debe estar escuchando en el puerto configurado (default: 4444).

Uso:
    TAURI_WEBDRIVER_PORT=4444 python -m tauri_automation

Al terminar (EOF en stdin, SIGINT o SIGTERM) se cierra la sesion activa.
"""
import asyncio
import base64
import json
import signal
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional, Type

from loguru import logger
from mcp.server.fastmcp import FastMCP, Image
from pydantic import BaseModel, ValidationError

from tauri_automation.application import tools
from tauri_automation.application.dto import (
    ElementSelectorDTO,
    ExecuteScriptDTO,
    ExecuteTauriCommandDTO,
    LaunchAppDTO,
    ScreenshotDTO,
    ToolResponse,
    TypeTextDTO,
    WaitForElementDTO,
    WaitForNavigationDTO,
)
from tauri_automation.core.config import DriverConfig, Settings, settings
from tauri_automation.core.logging_config import configure_logging
from tauri_automation.infrastructure.driver import SelectorStrategy, TauriDriver


def to_text(response: ToolResponse) -> str:
    """Serializa el sobre de respuesta como JSON indentado."""
    return json.dumps(response.to_payload(), indent=2, ensure_ascii=False, default=str)


async def call_tool(
    tool: Callable[..., Awaitable[ToolResponse]],
    driver: TauriDriver,
    dto_cls: Type[BaseModel],
    **fields: Any
) -> ToolResponse:
    """
    Valida los parametros con el DTO y ejecuta la herramienta.
    Los parametros invalidos tambien se reportan como {success: false}.
    """
    try:
        params = dto_cls(**fields)
    except ValidationError as e:
        return ToolResponse.fail(e)
    return await tool(driver, params)


async def shutdown_driver(driver: TauriDriver) -> None:
    """Cierra la sesion activa, si la hay, sin propagar errores."""
    if not driver.get_state().is_running:
        return
    logger.info("Limpieza: cerrando la aplicacion...")
    try:
        await driver.close()
    except Exception as e:
        logger.error(f"Error durante la limpieza: {e}")


def create_server(driver: TauriDriver, app_settings: Optional[Settings] = None) -> FastMCP:
    """
    Factory que crea el servidor MCP y registra las herramientas.

    Args:
        driver: Driver que ejecutara las operaciones
        app_settings: Configuracion (nombre del servidor)

    Returns:
        FastMCP: Servidor listo para run()
    """
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        logger.info(f"{app_settings.APP_NAME} v{app_settings.APP_VERSION} escuchando en stdio")
        try:
            yield
        finally:
            await shutdown_driver(driver)

    mcp = FastMCP(app_settings.APP_NAME, lifespan=lifespan)

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------

    @mcp.tool()
    async def launch_app(
        app_path: Optional[str] = None,
        args: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Lanza una aplicacion Tauri via tauri-driver.
        tauri-driver debe estar corriendo en el puerto configurado (default: 4444).

        Args:
            app_path: Ruta al binario de la aplicacion (si no, TAURI_APP_PATH)
            args: Argumentos de linea de comandos para la aplicacion
            env: Variables de entorno para la aplicacion
        """
        return to_text(await call_tool(
            tools.launch_app, driver, LaunchAppDTO,
            app_path=app_path, args=args or [], env=env or {}
        ))

    @mcp.tool()
    async def close_app() -> str:
        """Cierra la aplicacion Tauri en ejecucion."""
        return to_text(await tools.close_app(driver))

    @mcp.tool()
    async def get_app_state() -> str:
        """Estado de la aplicacion: si esta en ejecucion, sesion, titulo y URL de la pagina."""
        return to_text(await tools.get_app_state(driver))

    # ------------------------------------------------------------------
    # Captura de pantalla
    # ------------------------------------------------------------------

    @mcp.tool()
    async def capture_screenshot(
        filename: Optional[str] = None,
        return_base64: bool = True,
        timeout: Optional[int] = None
    ):
        """
        Captura la ventana de la aplicacion. Por defecto retorna la imagen PNG.

        Args:
            filename: Nombre sin extension para guardar el archivo (si no, timestamp)
            return_base64: True retorna la imagen; False la guarda y retorna la ruta
            timeout: Timeout en ms (default: 10000). 0 no espera.
        """
        response = await call_tool(
            tools.capture_screenshot, driver, ScreenshotDTO,
            filename=filename, return_base64=return_base64, timeout=timeout
        )

        if response.success and return_base64:
            return [
                response.data["message"],
                Image(data=base64.b64decode(response.data["base64"]), format="png"),
            ]
        return to_text(response)

    # ------------------------------------------------------------------
    # Interaccion con elementos
    # ------------------------------------------------------------------

    @mcp.tool()
    async def click_element(selector: str, by: SelectorStrategy = "css") -> str:
        """
        Hace click en un elemento de la UI.

        Args:
            selector: Selector (ej: "#button-id", ".clase", "//button", "Guardar")
            by: Estrategia: css, xpath, text (texto exacto) o partial_text
        """
        return to_text(await call_tool(
            tools.click_element, driver, ElementSelectorDTO,
            selector=selector, by=by
        ))

    @mcp.tool()
    async def type_text(selector: str, text: str, clear: bool = False, by: SelectorStrategy = "css") -> str:
        """
        Escribe texto en un input o elemento editable.

        Args:
            selector: Selector del input
            text: Texto a escribir
            clear: Limpiar el contenido antes de escribir
            by: Estrategia: css, xpath, text o partial_text
        """
        return to_text(await call_tool(
            tools.type_text, driver, TypeTextDTO,
            selector=selector, text=text, clear=clear, by=by
        ))

    @mcp.tool()
    async def wait_for_element(selector: str, timeout: Optional[int] = None, by: SelectorStrategy = "css") -> str:
        """
        Espera a que un elemento aparezca en el DOM.

        Args:
            selector: Selector a esperar
            timeout: Timeout en ms (default: TAURI_DEFAULT_TIMEOUT, 5000)
            by: Estrategia: css, xpath, text o partial_text
        """
        return to_text(await call_tool(
            tools.wait_for_element, driver, WaitForElementDTO,
            selector=selector, timeout=timeout, by=by
        ))

    @mcp.tool()
    async def wait_for_navigation(url_contains: Optional[str] = None, timeout: Optional[int] = None) -> str:
        """
        Espera a que la URL cambie. Siempre exige un cambio respecto a la URL actual.

        Args:
            url_contains: Substring que debe contener la nueva URL
            timeout: Timeout en ms (default: TAURI_DEFAULT_TIMEOUT, 5000)
        """
        return to_text(await call_tool(
            tools.wait_for_navigation, driver, WaitForNavigationDTO,
            url_contains=url_contains, timeout=timeout
        ))

    @mcp.tool()
    async def get_element_text(selector: str, by: SelectorStrategy = "css") -> str:
        """
        Obtiene el texto de un elemento.

        Args:
            selector: Selector del elemento
            by: Estrategia: css, xpath, text o partial_text
        """
        return to_text(await call_tool(
            tools.get_element_text, driver, ElementSelectorDTO,
            selector=selector, by=by
        ))

    # ------------------------------------------------------------------
    # Comandos, scripts y pagina
    # ------------------------------------------------------------------

    @mcp.tool()
    async def execute_tauri_command(command: str, args: Optional[Dict[str, Any]] = None) -> str:
        """
        Ejecuta un comando IPC de Tauri. El comando debe estar registrado en la aplicacion.

        Args:
            command: Nombre del comando
            args: Argumentos del comando
        """
        return to_text(await call_tool(
            tools.execute_tauri_command, driver, ExecuteTauriCommandDTO,
            command=command, args=args or {}
        ))

    @mcp.tool()
    async def execute_script(script: str, args: Optional[List[Any]] = None) -> str:
        """
        Ejecuta JavaScript en el contexto de la aplicacion y retorna su resultado.

        Args:
            script: Cuerpo del script (usar 'return' para retornar un valor)
            args: Argumentos disponibles como arguments[0..n]
        """
        return to_text(await call_tool(
            tools.execute_script, driver, ExecuteScriptDTO,
            script=script, args=args or []
        ))

    @mcp.tool()
    async def get_page_title() -> str:
        """Titulo de la pagina actual de la aplicacion."""
        return to_text(await tools.get_page_title(driver))

    @mcp.tool()
    async def get_page_url() -> str:
        """URL de la pagina actual de la aplicacion."""
        return to_text(await tools.get_page_url(driver))

    return mcp


def _raise_system_exit(signum, frame) -> None:
    logger.info(f"Senal {signum} recibida, terminando...")
    raise SystemExit(0)


def main() -> None:
    """Punto de entrada: configura logging, crea el driver y corre el servidor en stdio."""
    configure_logging(settings)
    signal.signal(signal.SIGTERM, _raise_system_exit)

    driver = TauriDriver(DriverConfig.from_settings(settings))
    server = create_server(driver)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Interrupcion recibida, terminando...")
    except Exception as e:
        logger.exception(f"Error fatal en el servidor MCP: {e}")
        sys.exit(1)
    finally:
        if driver.get_state().is_running:
            asyncio.run(shutdown_driver(driver))
