from pathlib import Path

import pytest

from quietpad.__main__ import create_argument_parser, main


def test_defaults():
    args = create_argument_parser().parse_args([])
    assert args.use_plugins
    assert args.without_plugins == []
    assert not args.verbose
    assert args.verbose_logger == []
    assert args.files == []


def test_plugin_options():
    args = create_argument_parser().parse_args(["--without-plugins", "fullscreen, zen_mode,"])
    assert args.without_plugins == ["fullscreen", "zen_mode"]
    assert not create_argument_parser().parse_args(["--no-plugins"]).use_plugins


def test_files_and_verbose_loggers():
    args = create_argument_parser().parse_args(
        ["--verbose-logger", "quietpad.zen", "--verbose-logger=quietpad.menubar", "a.txt"]
    )
    assert args.verbose_logger == ["quietpad.zen", "quietpad.menubar"]
    assert args.files == [Path("a.txt")]


def test_verbose_and_verbose_logger_conflict(capsys):
    with pytest.raises(SystemExit):
        create_argument_parser().parse_args(["-v", "--verbose-logger=quietpad.zen"])
    assert "not allowed with argument" in capsys.readouterr().err


# Plugin order is deterministic, there is nothing to shuffle
def test_no_shuffle_option(capsys):
    with pytest.raises(SystemExit):
        create_argument_parser().parse_args(["--shuffle-plugins"])
    assert "unrecognized arguments: --shuffle-plugins" in capsys.readouterr().err


def test_unknown_plugin_on_command_line(mocker, capsys):
    mocker.patch("quietpad.__main__._logs.setup")
    mocker.patch("quietpad.__main__.settings.init")
    mocker.patch("quietpad.__main__.messages.init")
    mocker.patch("quietpad.__main__.pluginloader.import_plugins")
    state_init = mocker.patch("quietpad.__main__._state.init")

    with pytest.raises(SystemExit):
        main(["--without-plugins=no_such_plugin"])
    assert "there is no plugin named 'no_such_plugin'" in capsys.readouterr().err
    state_init.assert_not_called()
