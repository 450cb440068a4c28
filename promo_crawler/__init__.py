"""Landing-page crawler that groups listed products by their promotional discount."""

from .version import __version__

__all__ = ["__version__"]
