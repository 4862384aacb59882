"""
Entidades del dominio.
"""
from tauri_automation.domain.entities.session_state import AppStateSnapshot, SessionState

__all__ = [
    "AppStateSnapshot",
    "SessionState"
]
