"""Deterministic pseudo-random numbers derived from string seeds.

Puzzle layouts must be reproducible: the same image and grid size always
produce the same interlock pattern. Python's ``random`` module is seeded
globally and its stream is an implementation detail, so the generator used
here is a small, fully specified one (mulberry32) seeded by a 32-bit FNV-1a
hash of the seed string.
"""

from typing import Callable, List, MutableSequence, TypeVar, Union

UINT32_MASK = 0xFFFFFFFF
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
MULBERRY_INCREMENT = 0x6D2B79F5

T = TypeVar("T")


def _imul(a: int, b: int) -> int:
    """32-bit integer multiplication with wrap-around."""
    return (a * b) & UINT32_MASK


def _utf16_units(text: str) -> List[int]:
    data = text.encode("utf-16-le")
    return [data[i] | (data[i + 1] << 8) for i in range(0, len(data), 2)]


def hash_string(text: str) -> int:
    """Hash a string to a non-zero unsigned 32-bit integer (FNV-1a).

    The hash runs over UTF-16 code units so that non-ASCII image URLs hash the
    same way a browser-side renderer would.
    """
    h = FNV_OFFSET_BASIS
    for unit in _utf16_units(text):
        h ^= unit
        h = _imul(h, FNV_PRIME)
    return h or 1


def mulberry32(seed: int) -> Callable[[], float]:
    """Return a float stream in [0, 1) fully determined by ``seed``."""
    state = seed & UINT32_MASK

    def next_float() -> float:
        nonlocal state
        state = (state + MULBERRY_INCREMENT) & UINT32_MASK
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / 4294967296

    return next_float


class SeededRandom:
    """Seeded random source with a few conveniences on top of mulberry32.

    Args:
        seed: A string (hashed with :func:`hash_string`) or an integer used
            directly as the 32-bit seed.
    """

    def __init__(self, seed: Union[str, int]):
        self.seed = hash_string(seed) if isinstance(seed, str) else seed & UINT32_MASK
        self._next = mulberry32(self.seed)

    def __call__(self) -> float:
        return self._next()

    def random(self) -> float:
        """Next float in [0, 1)."""
        return self._next()

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self._next()

    def randint(self, low: int, high: int) -> int:
        """Integer in the inclusive range [low, high]."""
        return low + int(self._next() * (high - low + 1))

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self._next() * (i + 1))
            items[i], items[j] = items[j], items[i]
