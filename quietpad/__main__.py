from __future__ import annotations

import argparse
import logging
from pathlib import Path

from quietpad import (
    __version__,
    _logs,
    _state,
    dirs,
    get_main_window,
    get_tab_manager,
    menubar,
    messages,
    pluginloader,
    settings,
)

log = logging.getLogger(__name__)


def _comma_separated(string: str) -> list[str]:
    return [part.strip() for part in string.split(",") if part.strip()]


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quietpad",
        description="A small text editor with a zen mode.",
        epilog="Log files and settings.json are in the directories given by platformdirs.",
    )
    parser.add_argument("--version", action="version", version=f"Quietpad {__version__}")

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="show all log messages on stderr, not only warnings and errors",
    )
    verbosity.add_argument(
        "--verbose-logger",
        metavar="NAME",
        action="append",
        default=[],
        help=(
            "show all log messages of one logger, e.g. --verbose-logger=quietpad.zen,"
            " can be given many times"
        ),
    )

    plugin_options = parser.add_argument_group("plugins")
    plugin_options.add_argument(
        "--no-plugins",
        dest="use_plugins",
        action="store_false",
        help="don't load any plugins, not even the zen mode plugin",
    )
    plugin_options.add_argument(
        "--without-plugins",
        metavar="NAMES",
        type=_comma_separated,
        default=[],
        help="don't load these plugins, e.g. --without-plugins=fullscreen,zen_mode",
    )

    parser.add_argument("files", metavar="FILE", type=Path, nargs="*", help="files to open")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    for directory in [dirs.user_cache_dir, dirs.user_config_dir, dirs.user_log_dir]:
        Path(directory).mkdir(parents=True, exist_ok=True)
    _logs.setup(verbose=args.verbose, verbose_loggers=args.verbose_logger)
    settings.init()
    messages.init()

    if args.use_plugins:
        pluginloader.import_plugins(args.without_plugins)
        found = {info.name for info in pluginloader.plugin_infos}
        for name in args.without_plugins:
            if name not in found:
                parser.error(f"--without-plugins: there is no plugin named {name!r}")

    _state.init(args)
    # Don't show the window before menus and plugins are ready
    get_main_window().withdraw()
    menubar._init()
    pluginloader.run_setup_functions()

    for path in args.files:
        get_tab_manager().open_file(path)

    get_main_window().deiconify()
    try:
        get_main_window().mainloop()
    finally:
        settings.save()
    log.info("Quietpad exited normally")


# python3 -m quietpad
if __name__ == "__main__":
    main()
