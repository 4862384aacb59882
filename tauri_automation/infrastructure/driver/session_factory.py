"""
Creacion de sesiones WebDriver contra tauri-driver.

tauri-driver expone un servidor W3C WebDriver; la aplicacion a lanzar
se indica con la capability 'tauri:options'.
"""
from typing import Callable, Dict, List, Optional

from loguru import logger
from selenium import webdriver
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.remote.webdriver import WebDriver

from tauri_automation.core.config import DriverConfig


# Firma de las fabricas de sesion: (config, app_path, args, env) -> WebDriver
SessionFactory = Callable[[DriverConfig, str, List[str], Dict[str, str]], WebDriver]


def build_options(app_path: str, args: Optional[List[str]] = None, env: Optional[Dict[str, str]] = None) -> ArgOptions:
    """
    Construye las opciones de la sesion para tauri-driver.

    Args:
        app_path: Binario de la aplicacion Tauri
        args: Argumentos de linea de comandos para la aplicacion
        env: Variables de entorno para la aplicacion

    Returns:
        ArgOptions con la capability 'tauri:options'
    """
    opts = ArgOptions()
    opts.set_capability("browserName", "wry")
    opts.set_capability("tauri:options", {
        "application": app_path,
        "args": list(args or []),
        "env": dict(env or {}),
    })
    return opts


def create_remote_session(
    config: DriverConfig,
    app_path: str,
    args: List[str],
    env: Dict[str, str]
) -> WebDriver:
    """
    Abre una sesion WebDriver remota en tauri-driver.

    Es una llamada bloqueante: debe ejecutarse via run_transport().

    Returns:
        WebDriver conectado a la aplicacion lanzada
    """
    logger.info(f"Conectando con tauri-driver en {config.webdriver_url} para: {app_path}")
    return webdriver.Remote(
        command_executor=config.webdriver_url,
        options=build_options(app_path, args, env)
    )
