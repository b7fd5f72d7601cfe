# Virtual events sometimes do nothing until tk has processed pending events.
# If a test behaves strangely, try calling update() on some widget before
# event_generate().

import logging
import os
import time
import tkinter
import unittest.mock

import platformdirs
import pytest

from quietpad import dirs, get_main_window, get_tab_manager, quit, tabs
from quietpad.__main__ import main


class _TemporaryDirs(platformdirs.PlatformDirs):
    temp_root: str

    @property
    def user_cache_dir(self) -> str:
        return os.path.join(self.temp_root, "cache")

    @property
    def user_config_dir(self) -> str:
        return os.path.join(self.temp_root, "config")

    @property
    def user_log_dir(self) -> str:
        return os.path.join(self.temp_root, "logs")


@pytest.fixture(scope="session", autouse=True)
def temporary_dirs(tmp_path_factory):
    # Properties can't be monkeypatched on the instance, and other modules
    # did "from quietpad import dirs", so change the class of the same object
    dirs.__class__ = _TemporaryDirs
    dirs.temp_root = str(tmp_path_factory.mktemp("quietpad"))
    for path in [dirs.user_cache_dir, dirs.user_config_dir, dirs.user_log_dir]:
        os.makedirs(path, exist_ok=True)
    yield


def _can_create_windows() -> bool:
    try:
        tkinter.Tk().destroy()
    except tkinter.TclError:
        return False
    return True


# Use this with pytestmark = pytest.mark.usefixtures("quietsession") in tests
# that need a running Quietpad
@pytest.fixture(scope="session")
def quietsession(temporary_dirs):
    if not _can_create_windows():
        pytest.skip("tkinter can't create windows, is there a display?")

    with pytest.raises(RuntimeError, match=r"^Quietpad is not running$"):
        get_main_window()

    # main() returns as soon as everything is set up
    with unittest.mock.patch.object(tkinter.Tk, "mainloop"):
        main([])

    yield

    # No "Do you want to save" dialogs
    for tab in get_tab_manager().tabs():
        get_tab_manager().close_tab(tab)
    quit()


@pytest.fixture
def tabmanager(quietsession):
    assert not get_tab_manager().tabs(), "a previous test left tabs open"
    yield get_tab_manager()
    for tab in get_tab_manager().tabs():
        get_tab_manager().close_tab(tab)


@pytest.fixture
def filetab(tabmanager):
    tab = tabs.FileTab(tabmanager)
    tabmanager.add_tab(tab)
    return tab


@pytest.fixture(autouse=True)
def fail_test_if_a_tkinter_callback_errors(mocker):
    mock = mocker.patch("tkinter.Tk.report_callback_exception")
    yield
    if mock.called:
        exc_type, exc, tb = mock.call_args.args
        raise RuntimeError("a tkinter callback raised an exception") from exc


@pytest.fixture(autouse=True)
def check_nothing_logged(request):
    # Tests that use caplog look at the logged errors themselves
    if "caplog" in request.fixturenames:
        yield
        return

    def fail(record: logging.LogRecord) -> None:
        raise RuntimeError(f"unexpected error logged: {record.getMessage()}")

    handler = logging.Handler(logging.ERROR)
    handler.emit = fail
    logging.getLogger().addHandler(handler)
    try:
        yield
    finally:
        logging.getLogger().removeHandler(handler)


@pytest.fixture
def wait_until():
    # CI machines can be slow
    default_timeout = 20 if os.environ.get("CI") else 4

    def wait(condition, *, timeout=default_timeout):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            get_main_window().update()
            if condition():
                return
        raise RuntimeError(f"condition still false after {timeout} seconds")

    return wait


@pytest.fixture
def menu_labels():
    def labels_of(menu: tkinter.Menu) -> list[str]:
        end = menu.index("end")
        return [
            menu.entrycget(index, "label")
            for index in range(0 if end is None else end + 1)
            if menu.type(index) != "separator"
        ]

    return labels_of
