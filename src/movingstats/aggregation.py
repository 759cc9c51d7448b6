"""Multi-window moving averages and deviations via prefix sums.

All functions are pure: they take an ordered list of bars (earliest first)
and never touch engine state. One prefix-sum pass serves every requested
window length, so the cost is O(n + total output) instead of O(n * windows).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from movingstats.errors import MovingStatsError, MovingStatsErrorCode
from movingstats.models.bar import PriceBar


def check_window_lengths(lengths: Iterable[int], capacity: int) -> list[int]:
    """Validate requested window lengths against ``capacity``.

    Returns the distinct lengths in ascending order.

    Raises:
        MovingStatsError: ``INVALID_WINDOW`` for a non-positive or
            non-integer length, ``WINDOW_TOO_LARGE`` for a length above
            ``capacity``.
    """
    checked: set[int] = set()
    for length in lengths:
        if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
            raise MovingStatsError(
                f"Moving window length must be a positive integer, got {length!r}.",
                code=MovingStatsErrorCode.INVALID_WINDOW,
            )
        if length > capacity:
            raise MovingStatsError(
                f"Tried to analyse moving window ({length}) that was larger "
                f"than universe window {capacity}.",
                code=MovingStatsErrorCode.WINDOW_TOO_LARGE,
            )
        checked.add(length)
    return sorted(checked)


def expected_length(size: int, window: int) -> int:
    """Number of ``window``-length averages over ``size`` bars."""
    return max(0, size - window + 1)


def prefix_sums(bars: Sequence[PriceBar]) -> list[PriceBar]:
    """Running totals ``S`` with ``S[0] = zero`` and ``S[i] = S[i-1] + bars[i-1]``."""
    sums = [PriceBar.zero()]
    for bar in bars:
        sums.append(sums[-1] + bar)
    return sums


def moving_means(
    bars: Sequence[PriceBar], lengths: Iterable[int],
) -> dict[int, list[PriceBar]]:
    """Moving averages of ``bars`` for every length in ``lengths``.

    For length ``L`` the result holds ``(S[i+L] - S[i]) / L`` for
    ``i = 0 .. n-L``, earliest window first; it is empty when ``L > n``.
    Lengths are assumed validated (see ``check_window_lengths``).
    """
    sums = prefix_sums(bars)
    n = len(bars)
    return {
        length: [
            (sums[i + length] - sums[i]) / length
            for i in range(expected_length(n, length))
        ]
        for length in lengths
    }


def mean_deviations(
    bars: Sequence[PriceBar], means: Mapping[int, Sequence[PriceBar]],
) -> dict[int, list[PriceBar]]:
    """Mean absolute deviation of each moving window around its own mean.

    For every bar ``j`` and every ``L``-window ``i`` covering it, the
    field-wise ``abs(bars[j] - means[L][i])`` is accumulated into slot
    ``i``; each slot is finally divided by ``L``. Output sequences are
    aligned with the supplied averages.

    Raises:
        MovingStatsError: ``LENGTH_MISMATCH`` when a supplied average
            sequence does not have ``n - L + 1`` entries for ``n = len(bars)``.
    """
    n = len(bars)
    for length, averages in means.items():
        expected = expected_length(n, length)
        if len(averages) != expected:
            raise MovingStatsError(
                f"Moving window ({length}) has {len(averages)} averages but "
                f"{expected} were expected for {n} bars.",
                code=MovingStatsErrorCode.LENGTH_MISMATCH,
            )

    deviations: dict[int, list[PriceBar]] = {}
    for length, averages in means.items():
        totals = [PriceBar.zero() for _ in averages]
        last_window = n - length
        for j, bar in enumerate(bars):
            for i in range(max(0, j - length + 1), min(j, last_window) + 1):
                totals[i] = totals[i] + abs(bar - averages[i])
        deviations[length] = [total / length for total in totals]
    return deviations
