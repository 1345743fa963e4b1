"""Play one round in-process and print what each call did.

Usage:
    python scripts/play_round.py --target 10 --bids 2 4 11

Bids alternate between the two players, starting with the first joiner; the
player due after the last bid stays.
"""

from __future__ import annotations

import argparse
import logging

from loddenthinks.game import LoddenGame

HOUSE = "0x" + "01" * 32
PLAYERS = ("0x" + "02" * 32, "0x" + "03" * 32)


def _short(identity: str | None) -> str:
    return "-" if identity is None else identity[:6]


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--target", type=int, default=10)
    parser.add_argument("--bids", type=int, nargs="*", default=[2, 4, 11])
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    game = LoddenGame()
    calls: list[tuple[str, str, dict[str, object]]] = [
        ("claim_house", HOUSE, {}),
        ("set_target", HOUSE, {"value": args.target}),
        ("claim_player", PLAYERS[0], {}),
        ("claim_player", PLAYERS[1], {}),
    ]
    for i, amount in enumerate(args.bids):
        calls.append(("bet", PLAYERS[i % 2], {"amount": amount}))
    calls.append(("stay", PLAYERS[len(args.bids) % 2], {}))
    calls.append(("reveal", HOUSE, {}))

    for action, caller, payload in calls:
        outcome = game.attempt(action, caller, payload)
        status = "ok" if outcome else f"rejected ({outcome.error})"
        events = ", ".join(f"{e.type}{e.payload}" for e in outcome.events)
        print(f"{action:<13} {_short(caller)} {status:<28} {events}")

    print(f"winner: {_short(game.state.winner)} bid={game.current_bid()} target={game.state.target}")


if __name__ == "__main__":
    main()
