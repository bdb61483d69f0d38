"""Ordered daily bar series."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, overload

from kumotracker.models.bar import Bar


@dataclass(frozen=True)
class BarSeries:
    """Chronological, immutable sequence of daily bars for one instrument.

    Dates are strictly ascending. Missing trading days are simply absent.
    Slicing always returns a new ``BarSeries``.
    """

    bars: tuple[Bar, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.bars, tuple):
            object.__setattr__(self, "bars", tuple(self.bars))
        for prev, cur in zip(self.bars, self.bars[1:]):
            if cur.date <= prev.date:
                raise ValueError(
                    f"Bar dates must be strictly ascending: {prev.date} then {cur.date}"
                )

    @classmethod
    def of(cls, bars: Iterable[Bar]) -> BarSeries:
        return cls(tuple(bars))

    def __len__(self) -> int:
        return len(self.bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(self.bars)

    @overload
    def __getitem__(self, index: int) -> Bar: ...

    @overload
    def __getitem__(self, index: slice) -> BarSeries: ...

    def __getitem__(self, index: int | slice) -> Bar | BarSeries:
        if isinstance(index, slice):
            return BarSeries(self.bars[index])
        return self.bars[index]

    @property
    def latest(self) -> Bar:
        if not self.bars:
            raise IndexError("latest bar of an empty series")
        return self.bars[-1]

    def window(self, length: int, offset: int = 0) -> BarSeries:
        """Return up to ``length`` bars ending ``offset`` bars before the latest.

        ``offset=0`` ends at the latest bar. A window that would start before
        the first bar is returned short rather than padded.
        """
        end = len(self.bars) - offset
        if end <= 0 or length <= 0:
            return BarSeries()
        start = max(end - length, 0)
        return BarSeries(self.bars[start:end])

    def tail(self, n: int) -> BarSeries:
        return self.window(n)
