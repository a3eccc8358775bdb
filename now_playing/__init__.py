"""Now Playing Proxy"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("now-playing-proxy")
except PackageNotFoundError:
    __version__ = "dev"
