"""Version number, taken from the installed distribution metadata."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("surfio")
except PackageNotFoundError:
    # Running from a source checkout without installation
    __version__ = "0.1.0.dev0"
