"""Small helpers shared by the plugins."""
from __future__ import annotations

import tkinter


def widget_exists(widget: tkinter.Misc) -> bool:
    """Check whether a widget is still alive.

    This is False after the widget, or the whole main window, is destroyed.
    """
    try:
        return bool(widget.winfo_exists())
    except tkinter.TclError:
        # Tcl interpreter deleted
        return False
