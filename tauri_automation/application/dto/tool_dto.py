"""
DTOs de las herramientas de automatizacion.
Definen los parametros de cada herramienta y el sobre de respuesta uniforme.
"""
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

from tauri_automation.infrastructure.driver.selectors import SelectorStrategy


T = TypeVar("T")


class ToolResponse(BaseModel, Generic[T]):
    """Sobre de respuesta: {success: true, data} o {success: false, error}."""

    success: bool = Field(..., description="Indica si la operacion fue exitosa")
    data: Optional[T] = Field(None, description="Resultado de la operacion")
    error: Optional[str] = Field(None, description="Mensaje de error")

    @classmethod
    def ok(cls, data: Any = None) -> "ToolResponse":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: BaseException) -> "ToolResponse":
        message = str(error) or type(error).__name__
        return cls(success=False, error=message)

    def to_payload(self) -> Dict[str, Any]:
        """Dict con 'data' en exito o 'error' en fallo, listo para serializar."""
        if self.success:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.error}


class LaunchAppDTO(BaseModel):
    """Parametros para lanzar la aplicacion."""

    app_path: Optional[str] = Field(None, description="Ruta al binario de la aplicacion Tauri")
    args: List[str] = Field(default_factory=list, description="Argumentos de linea de comandos")
    env: Dict[str, str] = Field(default_factory=dict, description="Variables de entorno")


class ScreenshotDTO(BaseModel):
    """Parametros para capturar la pantalla."""

    filename: Optional[str] = Field(None, description="Nombre de archivo sin extension")
    return_base64: bool = Field(True, description="Retornar base64 en lugar de guardar a archivo")
    timeout: Optional[int] = Field(None, ge=0, description="Timeout en ms")


class ElementSelectorDTO(BaseModel):
    """Selector de un elemento."""

    selector: str = Field(..., min_length=1, description="Selector del elemento")
    by: SelectorStrategy = Field("css", description="Estrategia de selector")


class TypeTextDTO(ElementSelectorDTO):
    """Parametros para escribir texto en un elemento."""

    text: str = Field(..., description="Texto a escribir")
    clear: bool = Field(False, description="Limpiar el contenido antes de escribir")


class WaitForElementDTO(ElementSelectorDTO):
    """Parametros para esperar un elemento."""

    timeout: Optional[int] = Field(None, ge=0, description="Timeout en ms")


class WaitForNavigationDTO(BaseModel):
    """Parametros para esperar una navegacion."""

    url_contains: Optional[str] = Field(None, description="Substring que debe contener la nueva URL")
    timeout: Optional[int] = Field(None, ge=0, description="Timeout en ms")


class ExecuteTauriCommandDTO(BaseModel):
    """Parametros para ejecutar un comando IPC de Tauri."""

    command: str = Field(..., min_length=1, description="Nombre del comando")
    args: Dict[str, Any] = Field(default_factory=dict, description="Argumentos del comando")


class ExecuteScriptDTO(BaseModel):
    """Parametros para ejecutar JavaScript en la aplicacion."""

    script: str = Field(..., min_length=1, description="Cuerpo del script")
    args: List[Any] = Field(default_factory=list, description="Argumentos posicionales (arguments[n])")
