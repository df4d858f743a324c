"""System and dependency report used when filing bug reports."""

import platform
import re
import sys
from functools import partial
from importlib.metadata import PackageNotFoundError, requires, version
from typing import IO, Callable, Optional

import psutil

_SPECIFIER = re.compile(r"(~=|==|!=|<=|>=|<|>|===)")
_EXTRA = re.compile(r"""extra\s*==\s*['"]([^'"]+)['"]""")


def _requirement_name(requirement: str) -> str:
    """Strip markers, version specifiers and extras from a requirement."""
    name = requirement.split(";")[0]
    name = _SPECIFIER.split(name)[0]
    return name.split("[")[0].strip()


def _requirements(package: str) -> dict[str, list[str]]:
    """Group the declared requirements of *package* by extra ('' = core)."""
    try:
        raw = requires(package) or []
    except PackageNotFoundError:
        raw = []
    groups: dict[str, list[str]] = {}
    for req in raw:
        match = _EXTRA.search(req)
        key = match.group(1) if match else ""
        groups.setdefault(key, []).append(_requirement_name(req))
    return groups


def sys_info(fid: Optional[IO] = None, developer: bool = False):
    """Print the system information for debugging.

    Parameters
    ----------
    fid : file-like, default=None
        The file to write to, passed to :func:`print`.
        Can be None to use :data:`sys.stdout`.
    developer : bool, default=False
        If True, display information about optional dependencies.
    """
    ljust = 26
    out = partial(print, end="", file=fid)
    package = __package__.split(".")[0]

    out("Platform:".ljust(ljust) + platform.platform() + "\n")
    out("Python:".ljust(ljust) + sys.version.replace("\n", " ") + "\n")
    out("Executable:".ljust(ljust) + sys.executable + "\n")
    out("CPU:".ljust(ljust) + platform.processor() + "\n")
    out("Physical cores:".ljust(ljust) + str(psutil.cpu_count(False)) + "\n")
    out("Logical cores:".ljust(ljust) + str(psutil.cpu_count(True)) + "\n")
    out("RAM:".ljust(ljust))
    out(f"{psutil.virtual_memory().total / float(2 ** 30):0.1f} GB\n")

    out("\nDependencies info\n")
    try:
        pkg_version = version(package)
    except PackageNotFoundError:
        pkg_version = "Not installed."
    out(f"{package}:".ljust(ljust) + pkg_version + "\n")

    groups = _requirements(package)
    _list_dependencies_info(out, ljust, groups.get("", []))

    if developer:
        for key in sorted(k for k in groups if k):
            out(f"\nOptional '{key}' info\n")
            _list_dependencies_info(out, ljust, groups[key])


def _list_dependencies_info(out: Callable, ljust: int, dependencies: list[str]):
    """List dependencies names and versions.

    Parameters
    ----------
    out : Callable
        output function
    ljust : int
         length of returned string
    dependencies : List[str]
        list of dependency names, without version specifiers
    """
    for dep in dependencies:
        try:
            version_ = version(dep)
        except PackageNotFoundError:
            version_ = "Not found."
        out(f"{dep}:".ljust(ljust) + version_ + "\n")
