import pytest

from valueset import Set


@pytest.fixture
def vowels():
    return Set("aeiou")


@pytest.fixture
def alphabet():
    return Set("abcdefghijklmnopqrstuvwxyz")


def test_vowels_and_alphabet(vowels, alphabet):
    assert vowels.is_subset_of(alphabet)
    assert not vowels.is_superset_of(alphabet)
    assert alphabet.is_superset_of(vowels)
    assert vowels.count == 5
    assert not vowels.contains("b")


def test_mutating_a_copy(vowels, alphabet):
    m = vowels.copy()
    m.add("a")
    assert m.count == 5
    m += "y"
    assert m.count == 6
    assert vowels.count == 5

    m += Set("åáâäàéêèëíîïìøóôöòúûüù")
    assert m.intersects_with(alphabet)
    assert not m.is_subset_of(alphabet)

    n = alphabet.intersection(m)
    assert n.remove("y") == "y"
    assert n == vowels


def test_bracketed_map(vowels):
    b = vowels.map(lambda x: "[" + x + "]")
    assert b.contains("[a]")
    assert b.count == 5


def test_empty_int_set():
    e = Set()
    assert e.is_empty
    assert e.start_index == e.end_index
    assert e.any_element() is None
    e += 7
    assert e.any_element() == 7


def test_big_set_equality():
    size = 100_000
    a = Set(range(1, size + 1))
    b = Set(range(1, size + 1))
    assert a == b
    a.remove(size)
    assert a != b
    a.add(size + 1)
    assert a.count == b.count
    assert a != b


def test_index_walk_counts_vowels(vowels):
    count = 0
    i = vowels.start_index
    while True:
        count += 1
        i = i.successor()
        if i == vowels.end_index:
            break
    assert count == 5
    assert sum(1 for _ in vowels) == 5
