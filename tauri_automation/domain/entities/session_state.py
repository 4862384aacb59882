"""
Entidad de dominio: SessionState (estado de la sesion de automatizacion).
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AppStateSnapshot:
    """
    Copia de solo lectura del estado de la sesion.
    Nunca incluye el handle del transporte.
    """

    is_running: bool
    app_path: Optional[str] = None
    session_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Representacion serializable del snapshot."""
        return {
            "is_running": self.is_running,
            "app_path": self.app_path,
            "session_id": self.session_id,
        }


@dataclass
class SessionState:
    """
    Estado de la unica sesion WebDriver que posee un TauriDriver.

    is_running se deriva del handle, de modo que "en ejecucion" y
    "handle presente" nunca pueden divergir.
    """

    handle: Optional[Any] = None
    app_path: Optional[str] = None
    session_id: Optional[str] = None

    @property
    def is_running(self) -> bool:
        """True si hay un handle de sesion activo."""
        return self.handle is not None

    def activate(self, handle: Any, app_path: str, session_id: Optional[str]) -> None:
        """
        Registra una sesion recien establecida.

        Args:
            handle: Sesion del transporte (WebDriver remoto)
            app_path: Binario lanzado
            session_id: Identificador asignado por el transporte
        """
        if handle is None:
            raise ValueError("El handle de la sesion no puede ser None")
        self.handle = handle
        self.app_path = app_path
        self.session_id = session_id

    def reset(self) -> None:
        """Vuelve al estado vacio."""
        self.handle = None
        self.app_path = None
        self.session_id = None

    def snapshot(self) -> AppStateSnapshot:
        """Retorna una copia inmutable sin el handle."""
        return AppStateSnapshot(
            is_running=self.is_running,
            app_path=self.app_path,
            session_id=self.session_id
        )
