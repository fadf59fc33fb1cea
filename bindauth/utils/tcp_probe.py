from __future__ import annotations

import socket


def tcp_probe(host: str, port: int, timeout_s: float) -> bool:
    """Fast TCP connect probe (best-effort)."""
    try:
        with socket.create_connection((host, int(port)), timeout=float(timeout_s)):
            return True
    except (OSError, ValueError):
        return False
