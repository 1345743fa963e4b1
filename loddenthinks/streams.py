from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Mapping, cast

import redis

from loddenthinks.core.events import GameEvent


@dataclass(frozen=True, slots=True)
class EventStream:
    game_id: str

    @property
    def key(self) -> str:
        return f"events:{self.game_id}"


def publish_to_stream(*, r: redis.Redis, stream: EventStream, fields: Mapping[str, str]) -> str:
    """Append an entry to a game's event stream."""

    # redis-py stubs expect field/value unions; we only use string fields/values.
    stream_id = r.xadd(stream.key, {str(k): str(v) for k, v in fields.items()})
    return cast(str, stream_id)


def publish_events(*, r: redis.Redis, game_id: str, events: Sequence[GameEvent]) -> list[str]:
    stream = EventStream(game_id=game_id)
    return [publish_to_stream(r=r, stream=stream, fields=e.as_fields(game_id=game_id)) for e in events]


def read_events(
    *,
    r: redis.Redis,
    game_id: str,
    start: str = "-",
    end: str = "+",
    count: int | None = None,
) -> list[tuple[str, dict[str, str]]]:
    return r.xrange(EventStream(game_id=game_id).key, min=start, max=end, count=count)
