import re
import sys
import tkinter
from pathlib import Path

from setuptools import find_packages, setup

assert sys.version_info >= (3, 10), "Quietpad needs Python 3.10 or newer"
assert tkinter.TkVersion >= 8.6, "Quietpad needs Tk 8.6 or newer"


def read_requirements(filename: str) -> list[str]:
    # comments and "-r other_file.txt" lines are for pip, not setuptools
    lines = Path(filename).read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and line.strip()[0] not in "#-"]


def read_version() -> str:
    init_py = Path("quietpad", "__init__.py").read_text(encoding="utf-8")
    match = re.search(r'^__version__ = "([^"]+)"$', init_py, re.MULTILINE)
    assert match is not None, "__version__ not found in quietpad/__init__.py"
    return match.group(1)


setup(
    name="quietpad",
    version=read_version(),
    description="A small tkinter text editor with a zen mode",
    license="MIT",
    python_requires=">=3.10",
    install_requires=read_requirements("requirements.txt"),
    extras_require={"test": read_requirements("requirements-dev.txt")},
    packages=find_packages(include=["quietpad", "quietpad.*"]),
    entry_points={"gui_scripts": ["quietpad = quietpad.__main__:main"]},
    zip_safe=False,
)
