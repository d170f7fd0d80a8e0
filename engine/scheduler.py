import heapq
import itertools
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from .model import ScheduledEvent

class EventScheduler:
    """Time-ordered queue of deferred actions.

    Events with equal fire times come out in the order they were scheduled.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, "ScheduledEvent"]] = []
        self._seq = itertools.count()

    def schedule(self, event: "ScheduledEvent", now: int) -> None:
        """Queue an event; it may not be due before the current clock."""
        if event.fire_time < now:
            raise ValueError(f"cannot schedule {event.action.value} at {event.fire_time}, clock is {now}")
        heapq.heappush(self._heap, (event.fire_time, next(self._seq), event))

    def drain(self, now: int) -> List["ScheduledEvent"]:
        """Remove and return every event due at or before now."""
        due: List["ScheduledEvent"] = []
        while self._heap and self._heap[0][0] <= now:
            due.append(heapq.heappop(self._heap)[2])
        return due

    def pending(self) -> List["ScheduledEvent"]:
        """Queued events in firing order, without consuming them."""
        return [e for _, _, e in sorted(self._heap)]

    def clear(self) -> None:
        self._heap.clear()

    def __len__(self) -> int:
        return len(self._heap)
