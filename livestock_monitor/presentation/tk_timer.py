"""Tk main-loop adapter for the render scheduler."""

from __future__ import annotations

import tkinter as tk
from typing import Callable


class TkTimerHandle:
    def __init__(self, widget: tk.Misc, after_id: str) -> None:
        self._widget = widget
        self._after_id: str | None = after_id

    def cancel(self) -> None:
        if self._after_id is None:
            return
        try:
            self._widget.after_cancel(self._after_id)
        except tk.TclError:
            # The widget was destroyed, which already dropped its pending callbacks.
            pass
        self._after_id = None


class TkTimerHost:
    """Schedule callbacks through ``widget.after``."""

    def __init__(self, widget: tk.Misc) -> None:
        self._widget = widget

    def call_later(self, delay: float, callback: Callable[[], None]) -> TkTimerHandle:
        after_id = self._widget.after(max(0, int(round(delay * 1000))), callback)
        return TkTimerHandle(self._widget, after_id)


__all__ = ["TkTimerHandle", "TkTimerHost"]
