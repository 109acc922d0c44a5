import logging
from collections.abc import Hashable, Iterable, Iterator
from typing import Any, Literal


_logger = logging.getLogger("valueset.storage")


class PresenceMap:
    """Hash-keyed presence map backing a `Set`.

    Uses a dictionary with None values to store the keys; the value carries no
    information. Every mutation bumps `version`, which is how iterators and
    indexes handed out by the owning `Set` detect that they went stale.

    The positional index space is a tuple snapshot of the keys, built lazily
    on first positional access and dropped on the next mutation.
    """

    __slots__ = ("values", "version", "_keys")
    values: dict[Any, Literal[None]]
    version: int
    _keys: tuple | None

    def __init__(self, iterable: Iterable | None = None) -> None:
        if iterable is None:
            self.values = {}
        else:
            self.values = dict.fromkeys(iterable)
        self.version = 0
        self._keys = None

    def __contains__(self, key) -> bool:
        return key in self.values

    def __iter__(self) -> Iterator:
        yield from self.values

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PresenceMap):
            return NotImplemented
        return self.values.keys() == other.values.keys()

    __hash__ = None  # type: ignore[assignment]

    def _mutated(self) -> None:
        self.version += 1
        self._keys = None

    def insert(self, key: Hashable) -> bool:
        if key in self.values:
            return False
        self.values[key] = None
        self._mutated()
        return True

    def delete(self, key) -> bool:
        try:
            del self.values[key]
        except KeyError:
            return False
        self._mutated()
        return True

    def clear(self) -> None:
        # A fresh dict releases the old table instead of keeping it sized
        if self.values:
            self.values = {}
            self._mutated()

    def reserve(self, capacity: int) -> None:
        _logger.debug(
            "Capacity hint of %d ignored: dict storage grows on demand", capacity
        )

    def copy(self) -> "PresenceMap":
        new_map = PresenceMap()
        new_map.values = self.values.copy()
        return new_map

    def update(self, other: Iterable) -> None:
        size = len(self.values)
        self.values.update(dict.fromkeys(other))
        if len(self.values) != size:
            self._mutated()

    def difference_update(self, other: Iterable) -> None:
        self_values = self.values
        size = len(self_values)
        try:
            for key in other:
                try:
                    del self_values[key]
                except KeyError:
                    pass
        finally:
            if len(self_values) != size:
                self._mutated()

    def retain(self, other) -> None:
        """Keep only the keys that are members of `other`."""
        self_values = self.values
        discarded = [k for k in self_values if k not in other]
        for key in discarded:
            del self_values[key]
        if discarded:
            self._mutated()

    def first(self, default=None):
        return next(iter(self.values), default)

    @property
    def start(self) -> int:
        return 0

    @property
    def end(self) -> int:
        return len(self.values)

    def key_at(self, position: int):
        if not 0 <= position < len(self.values):
            raise IndexError(
                f"Position {position} is outside of [0, {len(self.values)})"
            )
        if self._keys is None:
            self._keys = tuple(self.values)
        return self._keys[position]
