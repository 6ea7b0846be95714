import pytest

tk = pytest.importorskip("tkinter")
from tkinter import ttk  # noqa: E402

from livestock_monitor.presentation.ui_controls import (  # noqa: E402
    bind_combobox_selection,
    safe_configure,
    update_combobox_options,
)


@pytest.fixture
def tk_root():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("Tkinter display is unavailable")
    root.withdraw()
    yield root
    root.destroy()


def test_update_combobox_options_handles_empty_and_values(tk_root):
    variable = tk.StringVar(master=tk_root)
    combo = ttk.Combobox(tk_root, textvariable=variable)
    update_combobox_options(combo, variable, [], placeholder="Nothing")
    assert combo.cget("state") == "disabled"
    assert variable.get() == "Nothing"

    update_combobox_options(combo, variable, ["A", "B"], placeholder="Nothing", selected="B")
    assert combo.cget("state") == "readonly"
    assert variable.get() == "B"

    update_combobox_options(combo, variable, ["A", "B"], selected="Z")
    assert variable.get() == "A"


def test_bind_combobox_selection_reports_index(tk_root):
    variable = tk.StringVar(master=tk_root)
    combo = ttk.Combobox(tk_root, textvariable=variable)
    update_combobox_options(combo, variable, ["A", "B"])
    selected: list[int] = []
    bind_combobox_selection(combo, selected.append)

    combo.current(1)
    combo.event_generate("<<ComboboxSelected>>")

    assert selected == [1]


def test_safe_configure_ignores_destroyed_widgets(tk_root):
    label = ttk.Label(tk_root, text="before")
    safe_configure(label, text="after")
    assert label.cget("text") == "after"

    label.destroy()
    safe_configure(label, text="ignored")
