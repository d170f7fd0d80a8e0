from dataclasses import dataclass
from typing import Iterator, List, Tuple

@dataclass(frozen=True)
class RadioMessage:
    time: int  # game minute the message was sent
    sender: str
    text: str
    urgent: bool = False

    def __str__(self) -> str:
        return f"{self.sender}: {self.text}"

class RadioLog:
    """Append-only radio traffic for the renderer and narrator."""

    def __init__(self):
        self._log: List[RadioMessage] = []

    def append(self, msg: RadioMessage) -> int:
        """Append a message and return its offset."""
        self._log.append(msg)
        return len(self._log) - 1

    def since(self, offset: int, limit: int = 1000) -> Tuple[List[RadioMessage], int]:
        """Return messages starting from offset, up to limit."""
        offset = max(0, offset)
        chunk = self._log[offset: offset + limit]
        return chunk, offset + len(chunk)

    def tail(self, n: int) -> List[RadioMessage]:
        """Last n messages, oldest first."""
        if n <= 0:
            return []
        return self._log[-n:]

    def __len__(self) -> int:
        return len(self._log)

    def __iter__(self) -> Iterator[RadioMessage]:
        return iter(list(self._log))
