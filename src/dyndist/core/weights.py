"""Weight sequence with value semantics and a plain-text serial form."""

from __future__ import annotations

import re
from typing import IO, Iterable, Iterator

import numpy as np

from dyndist.core.sum_tree import SumTree

_TOKEN = re.compile(r"\S+")


class WeightFormatError(ValueError):
    """Raised when a serialized weight sequence cannot be parsed."""


class WeightBag:
    """Fixed-length sequence of non-negative weights backed by a
    :class:`SumTree`.

    Two bags compare equal when they have the same length and bit-equal
    weights.  Copies are independent.  The serial form is
    ``"<n> <w0> <w1> ... <wn-1>"``.
    """

    def __init__(self, weights: Iterable[float] = ()) -> None:
        self._tree = weights._tree.copy() if isinstance(weights, WeightBag) else SumTree(weights)

    # ── element access ────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self._tree.size

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the weights; reflects later updates."""
        return self._tree.leaves

    def weights(self) -> np.ndarray:
        """Return a copy of the weights."""
        return self._tree.leaves.copy()

    def __getitem__(self, index: int) -> float:
        assert 0 <= index < self._tree.size, f"index {index} out of range"
        return float(self._tree.leaves[index])

    def __iter__(self) -> Iterator[float]:
        return iter(self._tree.leaves.tolist())

    def __len__(self) -> int:
        return self._tree.size

    # ── tree operations ───────────────────────────────────────────────────

    def sum(self) -> float:
        """Total weight."""
        return self._tree.sum()

    def update(self, index: int, weight: float) -> None:
        """Replace the weight at *index*."""
        self._tree.update(index, weight)

    def find(self, probe: float) -> int:
        """Index whose cumulative interval contains *probe*.

        See :meth:`SumTree.find` for the clamping rules.
        """
        return self._tree.find(probe)

    # ── value semantics ───────────────────────────────────────────────────

    def copy(self) -> WeightBag:
        return WeightBag(self)

    def __copy__(self) -> WeightBag:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> WeightBag:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeightBag):
            return NotImplemented
        return self._tree == other._tree

    def __repr__(self) -> str:
        return f"WeightBag({self._tree.leaves.tolist()!r})"

    # ── serialization ─────────────────────────────────────────────────────

    def dumps(self) -> str:
        """Serialize as ``"<n> <w0> ... <wn-1>"``."""
        return " ".join([str(self.size), *(repr(w) for w in self)])

    def dump(self, fp: IO[str]) -> None:
        fp.write(self.dumps())

    @classmethod
    def parse(cls, text: str, pos: int = 0) -> tuple[WeightBag, int]:
        """Read one serialized bag from *text* starting at *pos*.

        Returns ``(bag, end)`` where *end* is the offset just past the last
        value read; anything after it is left untouched.

        Raises:
            WeightFormatError: if the count or any of the values is missing
                or not a number.
        """
        tokens = _TOKEN.finditer(text, pos)

        match = next(tokens, None)
        if match is None:
            raise WeightFormatError("expected weight count, got end of input")
        try:
            count = int(match.group())
        except ValueError:
            raise WeightFormatError(f"invalid weight count {match.group()!r}") from None
        if count < 0:
            raise WeightFormatError(f"weight count must be non-negative, got {count}")

        end = match.end()
        values: list[float] = []
        for i in range(count):
            match = next(tokens, None)
            if match is None:
                raise WeightFormatError(f"expected {count} weights, got {i}")
            try:
                values.append(float(match.group()))
            except ValueError:
                raise WeightFormatError(f"invalid weight {match.group()!r}") from None
            end = match.end()

        try:
            bag = cls(values)
        except ValueError as exc:
            raise WeightFormatError(str(exc)) from exc
        return bag, end

    @classmethod
    def loads(cls, text: str) -> WeightBag:
        """Deserialize a bag, ignoring any trailing data."""
        bag, _ = cls.parse(text)
        return bag

    @classmethod
    def load(cls, fp: IO[str]) -> WeightBag:
        return cls.loads(fp.read())
