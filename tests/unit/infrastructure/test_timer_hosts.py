from __future__ import annotations

import asyncio

import pytest

from livestock_monitor.infrastructure.timer_hosts import AsyncioTimerHost


def test_asyncio_host_runs_and_cancels_callbacks() -> None:
    fired: list[str] = []

    async def scenario() -> None:
        host = AsyncioTimerHost()
        host.call_later(0.01, lambda: fired.append("kept"))
        cancelled = host.call_later(0.01, lambda: fired.append("cancelled"))
        cancelled.cancel()
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert fired == ["kept"]


def test_tk_host_cancel_is_idempotent() -> None:
    tk = pytest.importorskip("tkinter")
    from livestock_monitor.presentation.tk_timer import TkTimerHost

    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("Tkinter display is unavailable")
    root.withdraw()
    fired: list[int] = []
    try:
        host = TkTimerHost(root)
        handle = host.call_later(0.0, lambda: fired.append(1))
        handle.cancel()
        handle.cancel()
        root.update()
    finally:
        root.destroy()

    assert fired == []
