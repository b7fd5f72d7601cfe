import pytest

from quietpad import actions, get_main_window, menubar
from quietpad.plugins import distraction_free, fullscreen, zen_mode
from quietpad.settings import global_settings

pytestmark = pytest.mark.usefixtures("quietsession")


@pytest.fixture
def zen_action():
    action = actions.get_action(zen_mode.ACTION_NAME)
    assert action is not None
    return action


@pytest.fixture(autouse=True)
def distraction_free_off_after_test():
    yield
    if distraction_free.get_distraction_free_mode().is_enabled():
        distraction_free.get_distraction_free_mode().toggle()


# Window managers are slow and unreliable about going full screen, especially in CI
@pytest.fixture
def fake_fullscreen(mocker):
    state = {"fullscreen": False}
    mocker.patch.object(fullscreen.TkWindowService, "is_full_screen_supported", return_value=True)
    mocker.patch.object(
        fullscreen.TkWindowService, "is_full_screen", side_effect=lambda frame: state["fullscreen"]
    )
    mocker.patch.object(
        fullscreen.TkWindowService,
        "set_full_screen",
        side_effect=(lambda frame, value: state.update(fullscreen=value)),
    )
    return state


def open_view_menu():
    # runs what would run when the user clicks the View menu
    view_menu = menubar.get_menu("View")
    view_menu.tk.eval(str(view_menu.cget("postcommand")))


def get_state(label):
    menu = menubar.get_menu("View")
    index = menubar._index_of_label(menu, label)
    assert index is not None
    return str(menu.entrycget(index, "state"))


def test_disabled_without_tabs(tabmanager, fake_fullscreen, zen_action):
    open_view_menu()
    assert menubar.get_action_label(zen_action) == "Enter Zen Mode"
    assert get_state("Enter Zen Mode") == "disabled"


def test_entering_and_exiting(filetab, fake_fullscreen, zen_action):
    open_view_menu()
    assert get_state("Enter Zen Mode") == "normal"

    menu = menubar.get_menu("View")
    menu.invoke(menubar._index_of_label(menu, "Enter Zen Mode"))
    assert distraction_free.get_distraction_free_mode().is_enabled()
    assert fake_fullscreen["fullscreen"]
    assert zen_mode.get_mode_toggle().is_zen_mode_enabled(filetab)
    assert menubar.get_action_label(zen_action) == "Exit Zen Mode"

    menu.invoke(menubar._index_of_label(menu, "Exit Zen Mode"))
    assert not distraction_free.get_distraction_free_mode().is_enabled()
    assert not fake_fullscreen["fullscreen"]
    assert menubar.get_action_label(zen_action) == "Enter Zen Mode"


def test_label_follows_distraction_free_menu_item(filetab, fake_fullscreen, zen_action):
    fake_fullscreen["fullscreen"] = True

    menu = menubar.get_menu("View")
    menu.invoke(menubar._index_of_label(menu, "Toggle Distraction Free Mode"))
    assert menubar.get_action_label(zen_action) == "Exit Zen Mode"

    menu.invoke(menubar._index_of_label(menu, "Toggle Distraction Free Mode"))
    assert menubar.get_action_label(zen_action) == "Enter Zen Mode"


def test_window_manager_exits_fullscreen(filetab, fake_fullscreen, zen_action):
    zen_action.callback()
    assert menubar.get_action_label(zen_action) == "Exit Zen Mode"

    # e.g. user pressed a keyboard shortcut of the window manager
    fake_fullscreen["fullscreen"] = False
    open_view_menu()
    assert menubar.get_action_label(zen_action) == "Enter Zen Mode"

    # clicking now goes back to full screen, distraction free mode stays on
    zen_action.callback()
    assert distraction_free.get_distraction_free_mode().is_enabled()
    assert fake_fullscreen["fullscreen"]


def test_hidden_when_fullscreen_not_supported(filetab, zen_action, menu_labels):
    if get_main_window().tk.call("tk", "windowingsystem") not in {"x11", "win32", "aqua"}:
        pytest.skip("full screen not supported here anyway")

    labels_before = menu_labels(menubar.get_menu("View"))
    assert "Enter Zen Mode" in labels_before

    global_settings.set("fullscreen_supported", False)
    try:
        assert menubar.get_action_label(zen_action) is None
        assert "Enter Zen Mode" not in menu_labels(menubar.get_menu("View"))
    finally:
        global_settings.reset("fullscreen_supported")

    assert menu_labels(menubar.get_menu("View")) == labels_before


def test_without_fullscreen_support_it_is_just_distraction_free(filetab, mocker, zen_action):
    mocker.patch.object(fullscreen.TkWindowService, "is_full_screen_supported", return_value=False)
    set_full_screen = mocker.patch.object(fullscreen.TkWindowService, "set_full_screen")

    zen_action.callback()
    assert distraction_free.get_distraction_free_mode().is_enabled()
    assert zen_mode.get_mode_toggle().is_zen_mode_enabled(filetab)
    set_full_screen.assert_not_called()
