"""Helpers shared by Tkinter presentation widgets."""

from __future__ import annotations

from collections.abc import Callable, Sequence
import tkinter as tk
from tkinter import ttk


def update_combobox_options(
    combo: ttk.Combobox,
    variable: tk.StringVar,
    options: Sequence[str],
    *,
    placeholder: str = "No cameras available",
    selected: str | None = None,
) -> None:
    """Populate ``combo`` with ``options`` and select ``selected`` when present."""

    if options:
        combo.configure(values=tuple(options), state="readonly")
        current = selected if selected in options else options[0]
        combo.set(current)
        variable.set(current)
    else:
        combo.configure(values=(placeholder,), state="disabled")
        combo.set(placeholder)
        variable.set(placeholder)


def bind_combobox_selection(combo: ttk.Combobox, callback: Callable[[int], None]) -> None:
    """Invoke ``callback`` with the selected index whenever ``combo`` changes."""

    def _handler(_event: object) -> None:
        callback(combo.current())

    combo.bind("<<ComboboxSelected>>", _handler)


def safe_configure(widget: tk.Widget, **kwargs: object) -> None:
    """Configure ``widget`` only if it still exists."""

    if widget.winfo_exists():
        widget.configure(**kwargs)
