"""
Configuracion central del servidor de automatizacion.
Gestiona variables de entorno y la configuracion inmutable del driver.

Variables reconocidas (todas opcionales):
- TAURI_APP_PATH: binario de la aplicacion Tauri por defecto
- TAURI_SCREENSHOT_DIR: directorio donde se guardan los screenshots
- TAURI_WEBDRIVER_HOST / TAURI_WEBDRIVER_PORT: donde escucha tauri-driver
- TAURI_DEFAULT_TIMEOUT: timeout por defecto de las esperas (ms)
- TAURI_DRIVER_PATH: ruta al binario de tauri-driver
"""
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


DEFAULT_WEBDRIVER_PORT = 4444
DEFAULT_TIMEOUT_MS = 5000


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="mcp-tauri-automation")
    APP_VERSION: str = Field(default="1.0.0")

    # Aplicacion y tauri-driver
    TAURI_APP_PATH: Optional[str] = Field(default=None)
    TAURI_SCREENSHOT_DIR: Optional[str] = Field(default=None)
    TAURI_WEBDRIVER_HOST: str = Field(default="127.0.0.1")
    TAURI_WEBDRIVER_PORT: Optional[int] = Field(default=None)
    TAURI_DEFAULT_TIMEOUT: Optional[int] = Field(default=None)
    TAURI_DRIVER_PATH: Optional[str] = Field(default=None)

    # Logging (stdout queda reservado para el protocolo MCP)
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="")

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


class DriverConfig(BaseModel):
    """
    Configuracion inmutable del TauriDriver.

    Todos los campos tienen valor por defecto; los valores que pasa
    el llamador tienen prioridad. Una vez construida no se puede modificar.
    """

    model_config = ConfigDict(frozen=True)

    app_path: str = Field(default="", description="Binario de la aplicacion por defecto")
    screenshot_dir: str = Field(
        default_factory=lambda: str(Path.cwd() / "screenshots"),
        description="Directorio de salida de screenshots"
    )
    webdriver_host: str = Field(default="127.0.0.1", description="Host de tauri-driver")
    webdriver_port: int = Field(default=DEFAULT_WEBDRIVER_PORT, description="Puerto de tauri-driver")
    default_timeout: int = Field(default=DEFAULT_TIMEOUT_MS, ge=0, description="Timeout por defecto (ms)")
    tauri_driver_path: str = Field(default="tauri-driver", description="Ruta al binario de tauri-driver")

    @property
    def webdriver_url(self) -> str:
        """URL del servidor WebDriver expuesto por tauri-driver."""
        return f"http://{self.webdriver_host}:{self.webdriver_port}"

    @classmethod
    def from_settings(cls, settings: Settings) -> "DriverConfig":
        """
        Construye la configuracion del driver a partir de las variables de entorno.
        Las variables no definidas conservan el valor por defecto.
        """
        overrides = {
            "app_path": settings.TAURI_APP_PATH,
            "screenshot_dir": settings.TAURI_SCREENSHOT_DIR,
            "webdriver_host": settings.TAURI_WEBDRIVER_HOST,
            "webdriver_port": settings.TAURI_WEBDRIVER_PORT,
            "default_timeout": settings.TAURI_DEFAULT_TIMEOUT,
            "tauri_driver_path": settings.TAURI_DRIVER_PATH,
        }
        return cls(**{key: value for key, value in overrides.items() if value is not None})


# Instancia global de configuracion
settings = Settings()
