"""vidctl: video production pipeline tracker."""

__version__ = "0.3.0"
