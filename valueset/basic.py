import copy as _copy
import operator
from collections.abc import Callable, Hashable, Iterable, Iterator, MutableSet
from collections.abc import Set as AbstractSet
from functools import reduce as _reduce
from typing import Any, Generic, TypeVar

from valueset.configdefaults import config
from valueset.exceptions import InvalidIndexError
from valueset.index import SetIndex
from valueset.storage import PresenceMap


T = TypeVar("T", bound=Hashable)
U = TypeVar("U", bound=Hashable)


def _check_capacity(minimum_capacity) -> int:
    minimum_capacity = operator.index(minimum_capacity)
    if minimum_capacity < 0:
        raise ValueError(
            f"Capacity hint must be non-negative, got {minimum_capacity}"
        )
    return minimum_capacity


class Set(MutableSet[T], Generic[T]):
    """Unordered collection of unique hashable values.

    Membership is stored in a `PresenceMap`, a dict whose values carry no
    information. A `Set` behaves as a value: `copy`, `Set(other)` and every
    operation that returns a set produce storage independent of their
    operands, so mutating the result never affects the inputs.

    Iteration order is unspecified, but it is stable as long as the set is not
    mutated. Iterators and `SetIndex` positions are invalidated by any
    mutation of the set they came from.

    Examples
    --------
    >>> vowels = Set("aeiou")
    >>> vowels.is_subset_of(Set("abcdefghijklmnopqrstuvwxyz"))
    True
    >>> vowels += "y"
    >>> vowels.count
    6
    """

    __slots__ = ("_storage",)
    _storage: PresenceMap

    def __init__(
        self,
        iterable: Iterable[T] | None = None,
        *,
        minimum_capacity: int | None = None,
    ) -> None:
        self._storage = PresenceMap(iterable)
        if minimum_capacity is not None:
            self.reserve_capacity(minimum_capacity)

    @classmethod
    def of(cls, *elements: T) -> "Set[T]":
        """Build a set from the given elements."""
        return cls(elements)

    @classmethod
    def with_capacity(cls, minimum_capacity: int) -> "Set[T]":
        """Create an empty set sized for at least `minimum_capacity` elements."""
        return cls(minimum_capacity=minimum_capacity)

    @classmethod
    def _from_iterable(cls, it):
        return cls(it)

    def _new(self, storage: PresenceMap) -> "Set[T]":
        new_set = type(self).__new__(type(self))
        new_set._storage = storage
        return new_set

    @staticmethod
    def _as_set(other: Iterable) -> AbstractSet:
        if isinstance(other, AbstractSet):
            return other
        return Set(other)

    def reserve_capacity(self, minimum_capacity: int) -> None:
        """Hint that the set will hold at least `minimum_capacity` elements.

        This never changes observable behaviour.
        """
        self._storage.reserve(_check_capacity(minimum_capacity))

    # Queries

    @property
    def count(self) -> int:
        return len(self._storage)

    @property
    def is_empty(self) -> bool:
        return len(self._storage) == 0

    @property
    def elements(self) -> list[T]:
        return list(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def contains(self, element) -> bool:
        return element in self._storage

    def __contains__(self, element) -> bool:
        return element in self._storage

    def any_element(self, default=None):
        """Return some member of the set, or `default` if it is empty.

        Which member is returned is unspecified and may change after a
        mutation.
        """
        return self._storage.first(default)

    # Mutation

    def add(self, element: T, *elements: T) -> None:
        storage = self._storage
        storage.insert(element)
        for e in elements:
            storage.insert(e)

    append = add

    def extend(self, iterable: Iterable[T]) -> None:
        self._storage.update(iterable)

    def remove(self, element, default=None):
        """Remove `element` and return it, or return `default` if it was absent."""
        if self._storage.delete(element):
            return element
        return default

    def discard(self, element) -> None:
        self._storage.delete(element)

    def remove_all(self) -> None:
        self._storage.clear()

    clear = remove_all

    def copy(self) -> "Set[T]":
        return self._new(self._storage.copy())

    __copy__ = copy

    def __deepcopy__(self, memo) -> "Set[T]":
        return type(self)(_copy.deepcopy(e, memo) for e in self._storage)

    # Algebra

    def is_equal_to(self, other: Iterable) -> bool:
        other = self._as_set(other)
        if len(self) != len(other):
            return False
        return all(e in other for e in self._storage)

    def __eq__(self, other) -> bool:
        if not isinstance(other, AbstractSet):
            return NotImplemented
        return self.is_equal_to(other)

    __hash__ = None  # type: ignore[assignment]

    def intersects_with(self, other: Iterable) -> bool:
        other = self._as_set(other)
        if len(self) <= len(other):
            smaller, larger = self._storage, other
        else:
            smaller, larger = other, self._storage
        return any(e in larger for e in smaller)

    def isdisjoint(self, other: Iterable) -> bool:
        return not self.intersects_with(other)

    def is_subset_of(self, other: Iterable) -> bool:
        other = self._as_set(other)
        if len(self) > len(other):
            return False
        return all(e in other for e in self._storage)

    def is_superset_of(self, other: Iterable) -> bool:
        other = self._as_set(other)
        if len(other) > len(self):
            return False
        storage = self._storage
        return all(e in storage for e in other)

    issubset = is_subset_of
    issuperset = is_superset_of

    def update(self, other: Iterable[T]) -> None:
        """Add every member of `other` to this set."""
        if other is self:
            return
        self._storage.update(other)

    def difference_update(self, other: Iterable) -> None:
        """Remove every member of `other` from this set."""
        if other is self:
            self._storage.clear()
            return
        self._storage.difference_update(other)

    def intersection_update(self, other: Iterable) -> None:
        """Keep only the members that are also in `other`."""
        if other is self:
            return
        self._storage.retain(self._as_set(other))

    def union(self, other: Iterable[T]) -> "Set[T]":
        new_storage = self._storage.copy()
        new_storage.update(other)
        return self._new(new_storage)

    def intersection(self, other: Iterable) -> "Set[T]":
        other = self._as_set(other)
        if len(self) <= len(other):
            smaller, larger = self._storage, other
        else:
            smaller, larger = other, self._storage
        return self._new(PresenceMap(e for e in smaller if e in larger))

    def difference(self, other: Iterable) -> "Set[T]":
        if other is self:
            return self._new(PresenceMap())
        new_storage = self._storage.copy()
        new_storage.difference_update(other)
        return self._new(new_storage)

    def __ior__(self, other):
        if not isinstance(other, AbstractSet):
            return NotImplemented
        self.update(other)
        return self

    def __iand__(self, other):
        if not isinstance(other, AbstractSet):
            return NotImplemented
        self.intersection_update(other)
        return self

    def __isub__(self, other):
        if not isinstance(other, AbstractSet):
            return NotImplemented
        self.difference_update(other)
        return self

    def __iadd__(self, other):
        # Any set-like right-hand side is a union, everything else one element
        if isinstance(other, AbstractSet):
            self.update(other)
        else:
            self.add(other)
        return self

    def __add__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.union(other)

    # Transforms

    def filter(self, predicate: Callable[[T], Any]) -> "Set[T]":
        return self._new(PresenceMap(e for e in self._storage if predicate(e)))

    def map(self, transform: Callable[[T], U]) -> "Set[U]":
        # Distinct inputs may map to equal outputs; those collapse
        return Set(transform(e) for e in self._storage)

    def reduce(self, initial, combine: Callable[[Any, T], Any]):
        return _reduce(combine, self._storage, initial)

    # Traversal

    def __iter__(self) -> Iterator[T]:
        storage = self._storage
        return self._iter(
            storage, iter(storage.values), storage.version, config.check_index_validity
        )

    @staticmethod
    def _iter(storage: PresenceMap, it: Iterator, version: int, check: bool):
        while True:
            if check and storage.version != version:
                raise InvalidIndexError("Set was mutated during iteration")
            try:
                element = next(it)
            except StopIteration:
                return
            yield element

    @property
    def start_index(self) -> SetIndex[T]:
        storage = self._storage
        return SetIndex(self, storage.start, storage.version)

    @property
    def end_index(self) -> SetIndex[T]:
        storage = self._storage
        return SetIndex(self, storage.end, storage.version)

    def __getitem__(self, key):
        """Read the element at a `SetIndex`, or test membership of any other key."""
        if isinstance(key, SetIndex):
            key._check_owner(self)
            key._check()
            return self._storage.key_at(key._position)
        return key in self._storage

    # Rendering

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.elements!r})"

    __str__ = __repr__
