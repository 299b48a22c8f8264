"""ProLingo review engine."""

from prolingo.consts import VERSION

__version__ = VERSION
