"""Small shared helpers."""

from .tcp_probe import tcp_probe

__all__ = ["tcp_probe"]
