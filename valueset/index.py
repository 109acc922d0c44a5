import logging
from functools import total_ordering
from typing import TYPE_CHECKING, Generic, TypeVar

from valueset.configdefaults import config
from valueset.exceptions import InvalidIndexError


if TYPE_CHECKING:
    from valueset.basic import Set


_logger = logging.getLogger("valueset.index")

T = TypeVar("T")


@total_ordering
class SetIndex(Generic[T]):
    """Opaque position in the traversal order of one `Set` instance.

    Positions run over the half-open range ``[set.start_index, set.end_index)``.
    An index is only meaningful for the set that produced it, and only until
    that set is next mutated. Any mutation invalidates every outstanding index;
    with ``config.check_index_validity`` enabled, stepping or dereferencing a
    stale index raises `InvalidIndexError`. Indexes compare equal only when
    they share the set, the position and the state of that set.
    """

    __slots__ = ("_owner", "_position", "_version")

    def __init__(self, owner: "Set[T]", position: int, version: int):
        self._owner = owner
        self._position = position
        self._version = version

    def _check(self) -> None:
        if not config.check_index_validity:
            return
        current = self._owner._storage.version
        if self._version != current:
            _logger.debug(
                "Stale SetIndex at position %d (version %d, set is at %d)",
                self._position,
                self._version,
                current,
            )
            raise InvalidIndexError(
                "SetIndex used after its set was mutated; request a new index"
            )

    def _check_owner(self, owner: "Set") -> None:
        if self._owner is not owner:
            raise InvalidIndexError("SetIndex used with a set that did not produce it")

    def successor(self) -> "SetIndex[T]":
        self._check()
        storage = self._owner._storage
        if self._position >= storage.end:
            raise IndexError("Cannot advance past the end index")
        return SetIndex(self._owner, self._position + 1, self._version)

    def predecessor(self) -> "SetIndex[T]":
        self._check()
        if self._position <= self._owner._storage.start:
            raise IndexError("Cannot step back before the start index")
        return SetIndex(self._owner, self._position - 1, self._version)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SetIndex):
            return NotImplemented
        return (
            self._owner is other._owner
            and self._position == other._position
            and self._version == other._version
        )

    def __lt__(self, other) -> bool:
        if not isinstance(other, SetIndex):
            return NotImplemented
        if self._owner is not other._owner:
            raise InvalidIndexError("Cannot order indexes of different sets")
        return self._position < other._position

    def __hash__(self) -> int:
        return hash((id(self._owner), self._position, self._version))

    def __repr__(self) -> str:
        return f"SetIndex({self._position})"
