"""
Ordered tenor dates of a base correlation term structure.

Tenor dates are validated once on construction so that every lookup can rely
on a strictly ascending sequence for its binary search.
"""

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import date

import numpy as np
from dateutil.relativedelta import relativedelta

from basecorr_core._types import IntArray
from basecorr_core.errors import PreconditionViolation

_TENOR_PATTERN = re.compile(r"^\s*(\d+)\s*([DWMY])\s*$", re.IGNORECASE)


def tenor_to_relativedelta(tenor: str) -> relativedelta:
    """
    Parse a tenor string such as ``"5Y"``, ``"6M"``, ``"2W"`` or ``"10D"``.

    Raises
    ------
    PreconditionViolation
        If the string is not a recognised tenor
    """
    match = _TENOR_PATTERN.match(tenor)
    if match is None:
        raise PreconditionViolation(f"Invalid tenor '{tenor}'")
    n, unit = int(match.group(1)), match.group(2).upper()
    if unit == "D":
        return relativedelta(days=n)
    if unit == "W":
        return relativedelta(weeks=n)
    if unit == "M":
        return relativedelta(months=n)
    return relativedelta(years=n)


@dataclass(frozen=True)
class TenorDates:
    """
    Strictly ascending tenor maturity dates.

    Attributes
    ----------
    dates : tuple[date, ...]
        Maturity date of each tenor
    names : tuple[str, ...] | None
        Optional tenor labels, one per date

    Example
    -------
    >>> tenors = TenorDates([date(2027, 6, 20), date(2029, 6, 20)], names=["5Y", "7Y"])
    >>> tenors.bracket(date(2028, 6, 20))
    (0, 1)
    """

    dates: tuple[date, ...]
    names: tuple[str, ...] | None = None
    _ordinals: IntArray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate ordering and label count."""
        dates = tuple(self.dates)
        if len(dates) == 0:
            raise PreconditionViolation("At least one tenor date is required")
        for d in dates:
            if not isinstance(d, date):
                raise PreconditionViolation(f"Tenor dates must be dates, got {d!r}")
        ordinals = np.array([d.toordinal() for d in dates], dtype=np.int64)
        if not np.all(np.diff(ordinals) > 0):
            raise PreconditionViolation(
                f"Tenor dates must be strictly increasing, got {[str(d) for d in dates]}"
            )
        object.__setattr__(self, "dates", dates)
        object.__setattr__(self, "_ordinals", ordinals)

        if self.names is not None:
            names = tuple(self.names)
            if len(names) != len(dates):
                raise PreconditionViolation(
                    f"Tenor names (len={len(names)}) and dates "
                    f"(len={len(dates)}) do not match"
                )
            object.__setattr__(self, "names", names)

    @classmethod
    def from_tenors(cls, as_of: date, tenors: Sequence[str]) -> "TenorDates":
        """
        Build tenor dates by rolling ``as_of`` forward by each tenor.

        Parameters
        ----------
        as_of : date
            Anchor date
        tenors : Sequence[str]
            Tenor labels, e.g. ``["3Y", "5Y", "7Y", "10Y"]``

        Returns
        -------
        TenorDates
            Dates labelled with the tenor strings
        """
        dates = [as_of + tenor_to_relativedelta(t) for t in tenors]
        return cls(tuple(dates), names=tuple(t.strip().upper() for t in tenors))

    def __len__(self) -> int:
        return len(self.dates)

    def __getitem__(self, idx: int) -> date:
        return self.dates[idx]

    def __iter__(self) -> Iterator[date]:
        return iter(self.dates)

    @property
    def first(self) -> date:
        """Earliest tenor date."""
        return self.dates[0]

    @property
    def last(self) -> date:
        """Latest tenor date."""
        return self.dates[-1]

    def index_of(self, d: date) -> int | None:
        """Index of the tenor falling exactly on ``d``, or None."""
        pos = int(np.searchsorted(self._ordinals, d.toordinal(), side="left"))
        if pos < len(self) and self._ordinals[pos] == d.toordinal():
            return pos
        return None

    def bracket(self, d: date) -> tuple[int, int]:
        """
        Adjacent tenors (k_low, k_high) with dates[k_low] <= d < dates[k_high].

        Raises
        ------
        PreconditionViolation
            If ``d`` is outside [first, last)
        """
        ordinal = d.toordinal()
        if not self._ordinals[0] <= ordinal < self._ordinals[-1]:
            raise PreconditionViolation(
                f"Date {d} is outside the tenor range [{self.first}, {self.last})"
            )
        k_high = int(np.searchsorted(self._ordinals, ordinal, side="right"))
        return k_high - 1, k_high

    def days_between(self, i: int, j: int) -> int:
        """Calendar days from tenor i to tenor j."""
        return int(self._ordinals[j] - self._ordinals[i])

    def days_from(self, d: date, i: int) -> int:
        """Calendar days from ``d`` to tenor i."""
        return int(self._ordinals[i] - d.toordinal())
