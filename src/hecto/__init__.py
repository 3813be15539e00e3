from .constants import HECTO_VERSION as __version__

__all__ = ["__version__"]
