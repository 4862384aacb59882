"""
Tests unitarios para transport_executor.py.

Verifica la ejecucion de llamadas al transporte en el ThreadPoolExecutor
dedicado y la carrera contra timeout sin cancelacion de la operacion.
"""
from __future__ import annotations

import asyncio
import threading
import time
from typing import List

import pytest

from tauri_automation.infrastructure.driver.transport_executor import (
    TRANSPORT_MAX_WORKERS,
    TRANSPORT_THREAD_PREFIX,
    run_transport,
    run_transport_with_timeout,
    submit_transport,
)


class TestRunTransport:
    """Tests para la funcion run_transport()."""

    @pytest.mark.asyncio
    async def test_executes_function(self) -> None:
        """Verifica que ejecuta la funcion y retorna el resultado."""
        result = await run_transport(lambda: "resultado")

        assert result == "resultado"

    @pytest.mark.asyncio
    async def test_with_args_and_kwargs(self) -> None:
        """Verifica que pasa argumentos posicionales y con nombre."""
        def build(name: str, prefix: str = "") -> str:
            return f"{prefix}{name}"

        result = await run_transport(build, "test", prefix="hello_")

        assert result == "hello_test"

    @pytest.mark.asyncio
    async def test_propagates_exception(self) -> None:
        """Verifica que propaga excepciones de la funcion ejecutada."""
        def function_that_raises() -> None:
            raise ValueError("Error de prueba")

        with pytest.raises(ValueError, match="Error de prueba"):
            await run_transport(function_that_raises)

    @pytest.mark.asyncio
    async def test_executes_in_transport_thread(self) -> None:
        """Verifica que la funcion corre en un thread del executor dedicado."""
        thread_names: List[str] = []

        await run_transport(lambda: thread_names.append(threading.current_thread().name))

        assert thread_names[0].startswith(TRANSPORT_THREAD_PREFIX)


class TestRunTransportWithTimeout:
    """Tests para la funcion run_transport_with_timeout()."""

    @pytest.mark.asyncio
    async def test_quick_operation_completes(self) -> None:
        """Verifica que una operacion rapida completa exitosamente."""
        result = await run_transport_with_timeout(lambda: "rapido", timeout_seconds=5.0)

        assert result == "rapido"

    @pytest.mark.asyncio
    async def test_raises_on_timeout(self) -> None:
        """Verifica que lanza TimeoutError si la operacion excede el timeout."""
        def slow_function() -> str:
            time.sleep(0.5)
            return "lento"

        with pytest.raises(asyncio.TimeoutError):
            await run_transport_with_timeout(slow_function, timeout_seconds=0.05)

    @pytest.mark.asyncio
    async def test_zero_timeout_does_not_wait(self) -> None:
        """Verifica que un timeout de 0 falla sin esperar a la operacion."""
        gate = threading.Event()
        started = time.monotonic()

        try:
            with pytest.raises(asyncio.TimeoutError):
                await run_transport_with_timeout(gate.wait, 5, timeout_seconds=0)
        finally:
            gate.set()

        assert time.monotonic() - started < 1.0

    @pytest.mark.asyncio
    async def test_abandoned_operation_keeps_running(self) -> None:
        """Verifica que la operacion perdedora no se cancela y termina despues."""
        finished = threading.Event()

        def slow_function() -> None:
            time.sleep(0.2)
            finished.set()

        with pytest.raises(asyncio.TimeoutError):
            await run_transport_with_timeout(slow_function, timeout_seconds=0.01)

        assert await asyncio.to_thread(finished.wait, 2) is True

    @pytest.mark.asyncio
    async def test_propagates_exception(self) -> None:
        """Verifica que propaga excepciones de la funcion."""
        def function_that_raises() -> None:
            raise RuntimeError("Error en funcion")

        with pytest.raises(RuntimeError, match="Error en funcion"):
            await run_transport_with_timeout(function_that_raises, timeout_seconds=5.0)


class TestAbandonedOperations:
    """Tests para operaciones abandonadas por timeout."""

    @pytest.mark.asyncio
    async def test_run_outside_the_pool(self) -> None:
        """Verifica que la operacion con timeout no corre en un worker del pool."""
        thread_names: List[str] = []

        await run_transport_with_timeout(
            lambda: thread_names.append(threading.current_thread().name),
            timeout_seconds=5.0
        )

        assert thread_names[0].startswith(f"{TRANSPORT_THREAD_PREFIX}detached-")

    @pytest.mark.asyncio
    async def test_hung_operations_do_not_starve_the_pool(self) -> None:
        """Verifica que mas operaciones colgadas que workers no bloquean run_transport."""
        gate = threading.Event()

        try:
            for _ in range(TRANSPORT_MAX_WORKERS + 1):
                with pytest.raises(asyncio.TimeoutError):
                    await run_transport_with_timeout(gate.wait, 5, timeout_seconds=0.02)

            result = await asyncio.wait_for(run_transport(lambda: "libre"), timeout=2)
        finally:
            gate.set()

        assert result == "libre"


class TestSubmitTransport:
    """Tests para la funcion submit_transport()."""

    @pytest.mark.asyncio
    async def test_future_survives_cancelled_waiter(self) -> None:
        """Verifica que el resultado sigue disponible tras cancelar la espera."""
        gate = threading.Event()
        future = submit_transport(lambda: gate.wait(5) and "tarde")
        waiter = asyncio.ensure_future(asyncio.wrap_future(future))
        await asyncio.sleep(0.05)
        waiter.cancel()

        with pytest.raises(asyncio.CancelledError):
            await waiter
        gate.set()

        assert await asyncio.wrap_future(future) == "tarde"
