"""
Configuración de fixtures para pytest.

FakeWebDriver reemplaza a la sesión remota de Selenium: guarda en memoria
elementos, URLs y llamadas para verificar el comportamiento del driver
sin tauri-driver ni aplicación real.
"""
import base64
import threading
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from tauri_automation.core.config import DriverConfig
from tauri_automation.infrastructure.driver import TauriDriver


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-png-data"


class FakeElement:
    """Elemento de UI en memoria."""

    def __init__(self, text: str = "", on_click: Optional[Callable[[], None]] = None):
        self.text = text
        self.value = ""
        self.clicks = 0
        self.calls: List[str] = []
        self._on_click = on_click

    def click(self) -> None:
        self.clicks += 1
        self.calls.append("click")
        if self._on_click:
            self._on_click()

    def clear(self) -> None:
        self.value = ""
        self.calls.append("clear")

    def send_keys(self, text: str) -> None:
        self.value += text
        self.calls.append(f"send_keys:{text}")


class FakeWebDriver:
    """Sesión WebDriver en memoria."""

    def __init__(self, session_id: str = "abc"):
        self.session_id = session_id
        self.title = "Demo App"
        self.elements: Dict[Tuple[str, str], List[FakeElement]] = {}
        self.implicit_wait: Optional[float] = None
        self.implicit_wait_error: Optional[Exception] = None
        self.implicit_wait_gate: Optional[threading.Event] = None
        self.quit_calls = 0
        self.quit_error: Optional[Exception] = None
        self.scripts: List[tuple] = []
        self.script_result = None
        self.script_error: Optional[Exception] = None
        self.screenshot_base64 = base64.b64encode(PNG_BYTES).decode("ascii")
        self.screenshot_gate: Optional[threading.Event] = None
        self._urls: List[str] = ["tauri://localhost/"]

    def set_urls(self, *urls: str) -> None:
        """Secuencia de URLs: cada lectura avanza una posicion y la ultima se mantiene."""
        self._urls = list(urls)

    @property
    def current_url(self) -> str:
        if len(self._urls) > 1:
            return self._urls.pop(0)
        return self._urls[0]

    def add_element(self, by: str, value: str, element: FakeElement) -> FakeElement:
        self.elements.setdefault((by, value), []).append(element)
        return element

    def find_elements(self, by: str, value: str) -> List[FakeElement]:
        return list(self.elements.get((by, value), []))

    def implicitly_wait(self, seconds: float) -> None:
        if self.implicit_wait_gate is not None:
            self.implicit_wait_gate.wait(timeout=5)
        if self.implicit_wait_error:
            raise self.implicit_wait_error
        self.implicit_wait = seconds

    def execute_script(self, script: str, *args):
        self.scripts.append((script, args))
        if self.script_error:
            raise self.script_error
        return self.script_result

    def get_screenshot_as_base64(self) -> str:
        if self.screenshot_gate is not None:
            self.screenshot_gate.wait(timeout=5)
        return self.screenshot_base64

    def quit(self) -> None:
        self.quit_calls += 1
        if self.quit_error:
            raise self.quit_error


class RecordingSessionFactory:
    """Fabrica de sesiones que registra cada llamada y retorna FakeWebDriver."""

    def __init__(self):
        self.calls: List[dict] = []
        self.sessions: List[FakeWebDriver] = []
        self.error: Optional[Exception] = None
        self.session_ids: List[str] = ["abc", "def", "ghi"]
        self.creation_gate: Optional[threading.Event] = None
        self.implicit_wait_gate: Optional[threading.Event] = None

    def __call__(self, config, app_path, args, env) -> FakeWebDriver:
        self.calls.append({"config": config, "app_path": app_path, "args": args, "env": env})
        if self.error:
            raise self.error
        if self.creation_gate is not None:
            self.creation_gate.wait(timeout=5)
        session = FakeWebDriver(session_id=self.session_ids[len(self.sessions) % len(self.session_ids)])
        session.implicit_wait_gate = self.implicit_wait_gate
        self.sessions.append(session)
        return session

    @property
    def last(self) -> FakeWebDriver:
        return self.sessions[-1]


@pytest.fixture
def driver_config(tmp_path) -> DriverConfig:
    """Configuracion con directorio de screenshots temporal y timeouts cortos."""
    return DriverConfig(
        app_path="",
        screenshot_dir=str(tmp_path / "screenshots"),
        default_timeout=300
    )


@pytest.fixture
def session_factory() -> RecordingSessionFactory:
    return RecordingSessionFactory()


@pytest.fixture
def driver(driver_config, session_factory) -> TauriDriver:
    """TauriDriver sin sesion, conectado a la fabrica falsa."""
    return TauriDriver(driver_config, session_factory=session_factory)


@pytest.fixture
def make_element() -> Callable[..., FakeElement]:
    """Constructor de elementos falsos."""
    return FakeElement


@pytest.fixture
def png_bytes() -> bytes:
    return PNG_BYTES
