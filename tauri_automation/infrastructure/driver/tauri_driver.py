"""
Tauri Driver - Gestion de la sesion WebDriver contra una aplicacion Tauri.

Posee como maximo una sesion activa, resuelve selectores, ejecuta
esperas acotadas por tiempo y hace de puente hacia el runtime de la
aplicacion (comandos IPC y scripts).

Todas las llamadas al transporte (Selenium) se ejecutan en threads via
run_transport() para no bloquear el event loop. El driver no serializa
llamadas concurrentes: el llamador espera cada operacion antes de la siguiente.

Uso:
    driver = TauriDriver(DriverConfig(webdriver_port=4444))
    await driver.launch("/ruta/a/mi-app")
    await driver.click("#inc")
    texto = await driver.get_element_text("#counter")
    await driver.close()
"""
import asyncio
import base64
from concurrent.futures import Future
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from selenium.common.exceptions import TimeoutException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from tauri_automation.core.config import DriverConfig
from tauri_automation.domain.entities import AppStateSnapshot, SessionState
from tauri_automation.infrastructure.driver.selectors import DEFAULT_STRATEGY, locator_for
from tauri_automation.infrastructure.driver.session_factory import SessionFactory, create_remote_session
from tauri_automation.infrastructure.driver.transport_executor import (
    run_transport,
    submit_transport,
    run_transport_with_timeout,
)
from tauri_automation.shared.exceptions import (
    AlreadyRunningError,
    CommandExecutionFailedError,
    ElementNotFoundError,
    LaunchFailedError,
    MissingAppPathError,
    NavigationTimeoutError,
    NotRunningError,
    ScreenshotTimeoutError,
    ScriptExecutionFailedError,
    WaitTimeoutError,
)


# Intervalos de polling (segundos)
ELEMENT_POLL_INTERVAL = 0.1
NAVIGATION_POLL_INTERVAL = 0.2

# Timeout por defecto de la captura de pantalla (ms)
SCREENSHOT_TIMEOUT_MS = 10000

# invoke() se inyecta globalmente en la ventana: Tauri v1 en __TAURI__, v2 en __TAURI__.core
TAURI_INVOKE_SCRIPT = """
const tauri = window.__TAURI__;
const invoke = tauri && (tauri.invoke || (tauri.core && tauri.core.invoke));
return invoke ? invoke(arguments[0], arguments[1]) : undefined;
"""


def _to_seconds(milliseconds: int) -> float:
    return milliseconds / 1000


def _safe_timestamp() -> str:
    """Timestamp ISO-8601 UTC apto para nombres de archivo (sin ':' ni '.')."""
    iso = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return iso.replace(":", "-").replace(".", "-")


def _quit_orphaned_session(creation: "Future[WebDriver]") -> None:
    """Cierra la sesion que llega despues de cancelar launch()."""
    if creation.cancelled() or creation.exception() is not None:
        return
    session = creation.result()
    logger.warning(f"Cerrando sesion huerfana de un lanzamiento cancelado: {session.session_id}")
    try:
        session.quit()
    except Exception as e:
        logger.warning(f"No se pudo cerrar la sesion huerfana: {type(e).__name__}: {e}")


class TauriDriver:
    """
    Driver de automatizacion con una unica sesion WebDriver.

    El estado de la sesion vive en un SessionState propio de la instancia;
    solo launch() y close() lo modifican, y lo hacen en un unico paso.
    """

    def __init__(
        self,
        config: Optional[DriverConfig] = None,
        session_factory: Optional[SessionFactory] = None
    ):
        """
        Inicializa el driver sin sesion activa.

        Args:
            config: Configuracion inmutable (defaults si no se proporciona)
            session_factory: Funcion que abre la sesion WebDriver. Por defecto
                se conecta a tauri-driver con webdriver.Remote.
        """
        self._config = config or DriverConfig()
        self._session_factory = session_factory or create_remote_session
        self._state = SessionState()
        self._launching = False

    # ------------------------------------------------------------------
    # Ciclo de vida de la sesion
    # ------------------------------------------------------------------

    async def launch(
        self,
        app_path: Optional[str] = None,
        args: Optional[List[str]] = None,
        env: Optional[Dict[str, str]] = None
    ) -> AppStateSnapshot:
        """
        Lanza la aplicacion Tauri y abre la sesion WebDriver.

        Args:
            app_path: Binario a lanzar (si no, el de la configuracion)
            args: Argumentos de linea de comandos para la aplicacion
            env: Variables de entorno para la aplicacion

        Returns:
            AppStateSnapshot con la sesion activa

        Raises:
            AlreadyRunningError: Si ya hay una sesion activa
            MissingAppPathError: Si no hay ruta de aplicacion
            LaunchFailedError: Si falla cualquier paso del establecimiento
        """
        if self._state.is_running or self._launching:
            raise AlreadyRunningError()

        resolved_path = app_path or self._config.app_path
        if not resolved_path:
            raise MissingAppPathError()

        self._launching = True
        handle: Optional[WebDriver] = None
        try:
            Path(self._config.screenshot_dir).mkdir(parents=True, exist_ok=True)

            creation = submit_transport(
                self._session_factory,
                self._config,
                resolved_path,
                list(args or []),
                dict(env or {})
            )
            try:
                handle = await asyncio.wrap_future(creation)
            except asyncio.CancelledError:
                creation.add_done_callback(_quit_orphaned_session)
                raise
            await run_transport(handle.implicitly_wait, _to_seconds(self._config.default_timeout))

            self._state.activate(handle, resolved_path, handle.session_id)
        except asyncio.CancelledError:
            logger.warning(f"Lanzamiento cancelado: {resolved_path}")
            self._state.reset()
            if handle is not None:
                await self._discard_session(handle)
            raise
        except Exception as e:
            logger.error(f"Error al lanzar la aplicacion {resolved_path}: {type(e).__name__}: {e}")
            self._state.reset()
            if handle is not None:
                await self._discard_session(handle)
            raise LaunchFailedError(e) from e
        finally:
            self._launching = False

        logger.info(f"Aplicacion lanzada: {resolved_path} (sesion {self._state.session_id})")
        return self._state.snapshot()

    async def close(self) -> None:
        """
        Cierra la sesion WebDriver (y con ella la aplicacion).

        El estado queda vacio siempre, incluso si el cierre del transporte
        falla; ese error solo se registra en el log.

        Raises:
            NotRunningError: Si no hay sesion activa
        """
        handle = self._require_session()
        session_id = self._state.session_id

        try:
            await run_transport(handle.quit)
            logger.info(f"Sesion WebDriver cerrada: {session_id}")
        except Exception as e:
            logger.error(f"Error al cerrar la sesion WebDriver {session_id}: {type(e).__name__}: {e}")
        finally:
            self._state.reset()

    def get_state(self) -> AppStateSnapshot:
        """Snapshot del estado de la sesion. No toca el transporte."""
        return self._state.snapshot()

    def get_config(self) -> DriverConfig:
        """Configuracion inmutable del driver."""
        return self._config

    # ------------------------------------------------------------------
    # Captura de pantalla
    # ------------------------------------------------------------------

    async def capture_screenshot(
        self,
        filename: Optional[str] = None,
        return_base64: bool = False,
        timeout: Optional[int] = None
    ) -> str:
        """
        Captura la ventana de la aplicacion.

        La captura compite contra el timeout; si pierde, se deja de esperar
        pero la llamada al transporte no se cancela y su resultado se descarta.

        Args:
            filename: Nombre sin extension (si no, se usa un timestamp)
            return_base64: Si True retorna el PNG en base64 en lugar de guardarlo
            timeout: Timeout en ms. None usa el default; 0 significa sin espera extra.

        Returns:
            Datos base64 o ruta del archivo guardado

        Raises:
            NotRunningError: Si no hay sesion activa
            ScreenshotTimeoutError: Si la captura no responde a tiempo
        """
        handle = self._require_session()
        timeout_ms = SCREENSHOT_TIMEOUT_MS if timeout is None else timeout

        try:
            screenshot = await run_transport_with_timeout(
                handle.get_screenshot_as_base64,
                timeout_seconds=_to_seconds(timeout_ms)
            )
        except asyncio.TimeoutError as e:
            raise ScreenshotTimeoutError(timeout_ms) from e

        if return_base64:
            return screenshot

        file_name = f"{Path(filename).name}.png" if filename else f"screenshot-{_safe_timestamp()}.png"
        file_path = Path(self._config.screenshot_dir) / file_name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(base64.b64decode(screenshot))

        logger.debug(f"Screenshot guardado en: {file_path}")
        return str(file_path)

    # ------------------------------------------------------------------
    # Interaccion con elementos
    # ------------------------------------------------------------------

    async def click(self, selector: str, strategy: str = DEFAULT_STRATEGY) -> None:
        """Hace click en el elemento. Un solo intento, sin reintentos."""
        element = await self._find_element(selector, strategy)
        await run_transport(element.click)

    async def type_text(
        self,
        selector: str,
        text: str,
        clear: bool = False,
        strategy: str = DEFAULT_STRATEGY
    ) -> None:
        """
        Escribe texto en un input o elemento editable.

        Limpiar y escribir son dos llamadas independientes: si la segunda
        falla, el elemento queda limpio.
        """
        element = await self._find_element(selector, strategy)
        if clear:
            await run_transport(element.clear)
        await run_transport(element.send_keys, text)

    async def get_element_text(self, selector: str, strategy: str = DEFAULT_STRATEGY) -> str:
        """Texto renderizado del elemento."""
        element = await self._find_element(selector, strategy)
        return await run_transport(lambda: element.text)

    async def wait_for_element(
        self,
        selector: str,
        timeout: Optional[int] = None,
        strategy: str = DEFAULT_STRATEGY
    ) -> None:
        """
        Espera a que el elemento exista en el DOM.

        Args:
            selector: Selector del elemento
            timeout: Timeout en ms (default de la configuracion). 0 hace una sola comprobacion.
            strategy: Estrategia de selector

        Raises:
            NotRunningError: Si no hay sesion activa
            WaitTimeoutError: Si el elemento no aparece a tiempo
        """
        handle = self._require_session()
        wait_timeout = self._config.default_timeout if timeout is None else timeout
        by, value = locator_for(selector, strategy)

        wait = WebDriverWait(handle, _to_seconds(wait_timeout), poll_frequency=ELEMENT_POLL_INTERVAL)
        try:
            await run_transport(wait.until, lambda d: d.find_elements(by, value))
        except TimeoutException as e:
            logger.debug(f"Timeout esperando elemento ({strategy}): {selector}")
            raise WaitTimeoutError(selector, wait_timeout, strategy) from e

    # ------------------------------------------------------------------
    # Navegacion
    # ------------------------------------------------------------------

    async def wait_for_navigation(
        self,
        url_contains: Optional[str] = None,
        timeout: Optional[int] = None
    ) -> str:
        """
        Espera a que la URL cambie respecto a la URL actual.

        Una URL que ya contiene url_contains antes de la llamada no basta:
        siempre se exige observar un cambio.

        Args:
            url_contains: Substring que debe contener la nueva URL
            timeout: Timeout en ms (default de la configuracion)

        Returns:
            La URL final observada

        Raises:
            NotRunningError: Si no hay sesion activa
            NavigationTimeoutError: Si no hay navegacion a tiempo
        """
        handle = self._require_session()
        timeout_ms = self._config.default_timeout if timeout is None else timeout
        start_url = await run_transport(lambda: handle.current_url)

        def navigated(driver: WebDriver):
            current_url = driver.current_url
            if current_url == start_url:
                return False
            if url_contains and url_contains not in current_url:
                return False
            return current_url

        wait = WebDriverWait(handle, _to_seconds(timeout_ms), poll_frequency=NAVIGATION_POLL_INTERVAL)
        try:
            return await run_transport(wait.until, navigated)
        except TimeoutException as e:
            raise NavigationTimeoutError(timeout_ms, url_contains, start_url) from e

    async def get_title(self) -> str:
        """Titulo de la pagina actual."""
        handle = self._require_session()
        return await run_transport(lambda: handle.title)

    async def get_url(self) -> str:
        """URL de la pagina actual."""
        handle = self._require_session()
        return await run_transport(lambda: handle.current_url)

    # ------------------------------------------------------------------
    # Puente hacia el runtime de la aplicacion
    # ------------------------------------------------------------------

    async def execute_command(self, name: str, args: Optional[Dict[str, Any]] = None) -> Any:
        """
        Ejecuta un comando IPC de Tauri via invoke().

        El valor retornado se pasa tal cual, sin interpretarlo.

        Raises:
            NotRunningError: Si no hay sesion activa
            CommandExecutionFailedError: Ante cualquier fallo del comando
        """
        handle = self._require_session()
        try:
            return await run_transport(handle.execute_script, TAURI_INVOKE_SCRIPT, name, args or {})
        except Exception as e:
            logger.warning(f"Fallo el comando Tauri '{name}': {type(e).__name__}: {e}")
            raise CommandExecutionFailedError(name, e) from e

    async def execute_script(self, script: str, args: Optional[List[Any]] = None) -> Any:
        """
        Ejecuta JavaScript arbitrario en el contexto de la aplicacion.

        Los args quedan disponibles en el script como arguments[0..n].
        """
        handle = self._require_session()
        try:
            return await run_transport(handle.execute_script, script, *(args or []))
        except Exception as e:
            logger.warning(f"Fallo el script: {type(e).__name__}: {e}")
            raise ScriptExecutionFailedError(e) from e

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_session(self) -> WebDriver:
        if not self._state.is_running:
            raise NotRunningError()
        return self._state.handle

    async def _find_element(self, selector: str, strategy: str) -> WebElement:
        handle = self._require_session()
        by, value = locator_for(selector, strategy)
        elements = await run_transport(handle.find_elements, by, value)
        if not elements:
            raise ElementNotFoundError(selector, strategy)
        return elements[0]

    async def _discard_session(self, handle: WebDriver) -> None:
        """Cierra una sesion a medio establecer sin propagar errores."""
        try:
            await run_transport(handle.quit)
        except Exception as e:
            logger.warning(f"No se pudo cerrar la sesion incompleta: {type(e).__name__}: {e}")
