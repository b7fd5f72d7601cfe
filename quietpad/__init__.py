"""Quietpad is a small editor with a zen mode.

Zen mode combines distraction-free editing with a full-screen window. Most
of Quietpad is plugins: see the modules in :mod:`quietpad.plugins`, and
:mod:`quietpad.zen` for the toggle itself.
"""

import os
import sys

import platformdirs

__version__ = "1.0.0"


class _Dirs(platformdirs.PlatformDirs):
    # platformdirs puts logs to ~/.local/state on linux, keep them with the cache instead
    @property
    def user_log_dir(self) -> str:
        if sys.platform in {"win32", "darwin"}:
            return super().user_log_dir
        return os.path.join(self.user_cache_dir, "log")


# Lowercase directory names look wrong on windows and mac
if sys.platform in {"win32", "darwin"}:
    dirs = _Dirs("Quietpad", appauthor=False)
else:
    dirs = _Dirs("quietpad", appauthor=False)

# _state needs dirs
from quietpad import _state  # noqa: E402

get_main_window = _state.get_main_window
get_parsed_args = _state.get_parsed_args
get_horizontal_panedwindow = _state.get_horizontal_panedwindow
get_vertical_panedwindow = _state.get_vertical_panedwindow
get_tab_manager = _state.get_tab_manager
quit = _state.quit
