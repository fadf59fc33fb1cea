from __future__ import annotations


def normalize_domain(domain: str | None) -> str:
    return (domain or "").strip().strip(".").lower()


def build_principal(username: str | None, domain_suffix: str) -> str:
    """UPN-style bind name: ``lowercase(username) + "@" + domain_suffix``.

    The username is not trimmed or otherwise rewritten; only case is folded.
    """
    return f"{(username or '').lower()}@{domain_suffix}"
