from __future__ import annotations


def acct(n: int) -> str:
    """Account-style identity: 0x followed by the byte `n` repeated 32 times."""

    return "0x" + f"{n:02x}" * 32


ZERO = acct(0)
HOUSE = acct(1)
P1 = acct(2)
P2 = acct(3)
OUTSIDER = acct(4)
