"""Data quality validation for price bars."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from movingstats.models.bar import PriceBar


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_bars(bars: list[PriceBar], max_move: float | None = 0.10) -> ValidationResult:
    """Run all quality checks on a list of bars.

    Checks:
        1. Not empty
        2. No NaN/inf prices or volume
        3. Volume sanity (volume and trade count non-negative)
        4. Price sanity (no single-bar close move above ``max_move``;
           skipped when ``max_move`` is None)
        5. Timestamp ordering (strictly increasing)
        6. OHLC consistency (high >= low, high >= open/close)
    """
    result = ValidationResult()

    # 1. Not empty
    if not bars:
        result.checks.append(ValidationCheck("not_empty", False, "No bars provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(bars)} bars"))

    # 2. No NaN/inf
    nan_count = 0
    for b in bars:
        for val in (b.open, b.high, b.low, b.close, b.vwap, b.volume):
            if math.isnan(val) or math.isinf(val):
                nan_count += 1
    if nan_count:
        result.checks.append(ValidationCheck("no_nulls", False, f"{nan_count} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("no_nulls", True))

    # 3. Volume sanity
    negative = sum(1 for b in bars if b.volume < 0 or b.count < 0)
    if negative:
        result.checks.append(
            ValidationCheck("volume_sanity", False, f"{negative} bars with negative volume/count")
        )
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    # 4. Price sanity
    if max_move is not None:
        extreme = 0
        for prev, curr in zip(bars, bars[1:]):
            if prev.close > 0 and abs(curr.close - prev.close) / prev.close > max_move:
                extreme += 1
        if extreme:
            result.checks.append(
                ValidationCheck("price_sanity", False, f"{extreme} bars with >{max_move:.0%} move")
            )
        else:
            result.checks.append(ValidationCheck("price_sanity", True))

    # 5. Timestamp ordering
    out_of_order = sum(1 for prev, curr in zip(bars, bars[1:]) if curr.time <= prev.time)
    if out_of_order:
        result.checks.append(
            ValidationCheck("timestamp_order", False, f"{out_of_order} out of order")
        )
    else:
        result.checks.append(ValidationCheck("timestamp_order", True))

    # 6. OHLC consistency
    inconsistent = 0
    for b in bars:
        if b.high < b.low:
            inconsistent += 1
        elif b.high < b.open or b.high < b.close:
            inconsistent += 1
        elif b.low > b.open or b.low > b.close:
            inconsistent += 1
    if inconsistent:
        result.checks.append(
            ValidationCheck("ohlc_consistency", False, f"{inconsistent} bars with H<L or H<O/C")
        )
    else:
        result.checks.append(ValidationCheck("ohlc_consistency", True))

    return result
