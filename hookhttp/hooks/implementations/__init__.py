"""Built-in listener implementations."""

from .logging import LoggingListener


__all__ = ["LoggingListener"]
