"""
Ejecutor de operaciones del transporte WebDriver en threads separados.

Selenium es sincrono: cada llamada al transporte (crear sesion, buscar
elementos, ejecutar scripts, capturar pantalla, cerrar sesion) bloquea
hasta que tauri-driver responde. Este modulo las ejecuta en un
ThreadPoolExecutor dedicado para no bloquear el event loop del servidor MCP.

Timeouts:
- run_transport_with_timeout() compite la operacion contra un timer.
- Si gana el timer, se deja de esperar pero el thread NO se cancela:
  la operacion puede terminar despues y su resultado se descarta.
- Las operaciones con timeout corren en un thread propio, fuera del pool:
  una operacion abandonada nunca ocupa un worker que necesite close().

Uso:
    from tauri_automation.infrastructure.driver.transport_executor import run_transport

    url = await run_transport(lambda: driver.current_url)
    data = await run_transport_with_timeout(driver.get_screenshot_as_base64, timeout_seconds=10)
"""
import asyncio
import atexit
import itertools
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, TypeVar

from loguru import logger


T = TypeVar("T")

# Una sola sesion activa; las operaciones con timeout no usan el pool
TRANSPORT_MAX_WORKERS = 4
TRANSPORT_THREAD_PREFIX = "tauri-transport-"

_transport_executor = ThreadPoolExecutor(
    max_workers=TRANSPORT_MAX_WORKERS,
    thread_name_prefix=TRANSPORT_THREAD_PREFIX
)


def _shutdown_executor() -> None:
    """Cierra el executor al terminar el proceso sin esperar operaciones abandonadas."""
    logger.debug("Cerrando ThreadPoolExecutor del transporte...")
    _transport_executor.shutdown(wait=False, cancel_futures=True)


atexit.register(_shutdown_executor)

_detached_counter = itertools.count(1)


def submit_transport(func: Callable[..., T], *args: Any) -> "Future[T]":
    """
    Encola una llamada al transporte y retorna el Future del pool.

    A diferencia de run_transport(), el Future sobrevive a la cancelacion
    de quien lo espera: sirve para recuperar resultados que llegan tarde.
    """
    return _transport_executor.submit(func, *args)


def _start_detached(func: Callable[..., T], *args: Any) -> "Future[T]":
    """Ejecuta la llamada en un thread daemon propio y retorna su Future."""
    future: "Future[T]" = Future()

    def runner() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            result = func(*args)
        except BaseException as e:
            future.set_exception(e)
        else:
            future.set_result(result)

    threading.Thread(
        target=runner,
        name=f"{TRANSPORT_THREAD_PREFIX}detached-{next(_detached_counter)}",
        daemon=True
    ).start()
    return future


async def run_transport(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Ejecuta una llamada al transporte en un thread del executor dedicado.

    Args:
        func: Funcion o metodo sincrono a ejecutar
        *args: Argumentos posicionales para la funcion
        **kwargs: Argumentos con nombre para la funcion

    Returns:
        El resultado de la funcion ejecutada

    Raises:
        Cualquier excepcion que la funcion original lance
    """
    if kwargs:
        func = partial(func, **kwargs)

    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(_transport_executor, func, *args)
    except Exception as e:
        logger.debug(f"Error en operacion del transporte: {type(e).__name__}: {e}")
        raise


async def run_transport_with_timeout(
    func: Callable[..., T],
    *args: Any,
    timeout_seconds: float,
    **kwargs: Any
) -> T:
    """
    Ejecuta una llamada al transporte compitiendo contra un timeout.

    Un timeout de 0 se respeta literalmente: no hay presupuesto extra de espera.
    La operacion corre en un thread propio; al expirar sigue corriendo alli
    y su resultado tardio se descarta, sin bloquear workers del pool.

    Args:
        func: Funcion o metodo sincrono a ejecutar
        *args: Argumentos posicionales
        timeout_seconds: Tiempo maximo de espera en segundos
        **kwargs: Argumentos con nombre

    Returns:
        El resultado de la funcion ejecutada

    Raises:
        asyncio.TimeoutError: Si la operacion excede el timeout
        Cualquier excepcion que la funcion original lance
    """
    if kwargs:
        func = partial(func, **kwargs)

    future = asyncio.wrap_future(_start_detached(func, *args))
    try:
        return await asyncio.wait_for(future, timeout=timeout_seconds)
    except asyncio.TimeoutError:
        logger.warning(f"Timeout ({timeout_seconds}s) en operacion del transporte: {func}")
        raise
    except Exception as e:
        logger.debug(f"Error en operacion del transporte: {type(e).__name__}: {e}")
        raise

