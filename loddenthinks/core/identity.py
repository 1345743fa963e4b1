from __future__ import annotations

# All-zero account id; never a valid house or player.
ZERO_IDENTITY = "0x" + "00" * 32


def is_sentinel(identity: str | None) -> bool:
    """True for identities that must never hold a role.

    Covers the empty value and any all-zero spelling of an account id
    (``0x00..00``, ``00..00``, ``0``).
    """

    if identity is None:
        return True
    raw = identity.strip().lower()
    if raw.startswith("0x"):
        raw = raw[2:]
    return raw == "" or set(raw) == {"0"}
