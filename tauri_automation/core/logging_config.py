"""
Configuracion de logging con loguru.

El servidor MCP usa stdout como canal del protocolo, por lo que todos
los sinks de log escriben en stderr o en archivo.
"""
import sys

from loguru import logger

from tauri_automation.core.config import Settings


LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function} - {message}"


def configure_logging(settings: Settings) -> None:
    """
    Reemplaza el sink por defecto de loguru.

    Args:
        settings: Configuracion con LOG_LEVEL y LOG_FILE
    """
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=settings.LOG_LEVEL)

    if settings.LOG_FILE:
        logger.add(
            settings.LOG_FILE,
            format=LOG_FORMAT,
            rotation="50 MB",
            retention="10 days",
            level=settings.LOG_LEVEL
        )
