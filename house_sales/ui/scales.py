"""
Value -> pixel scales for the two scenes plus the region color palette.

The rounding rules follow the d3 conventions the charts were designed with:
linear domains are "niced" to a step of 1, 2 or 5 times a power of ten
(about ten ticks), logarithmic domains are extended to whole powers of ten,
and band scales split the range into equal padded slots.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import plotly.express as px

from house_sales.config import BAND_PADDING, LEGEND_ALL_SWATCH

Range = Tuple[float, float]

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)

TABLEAU10 = list(px.colors.qualitative.T10)


def tick_increment(start: float, stop: float, count: int) -> float:
    """Positive: step size. Negative: inverse of a fractional step."""
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * 10 ** power
    return -(10 ** -power) / factor


def nice_linear(start: float, stop: float, count: int = 10) -> Range:
    if not (stop > start):
        return start, stop
    previous_step = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == previous_step:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        previous_step = step
    return float(start), float(stop)


def nice_log(start: float, stop: float) -> Range:
    return (
        float(10 ** math.floor(math.log10(start))),
        float(10 ** math.ceil(math.log10(stop))),
    )


class LinearScale:
    def __init__(self, domain: Range, range_: Range) -> None:
        self.domain = domain
        self.range = range_

    def __call__(self, value):
        d0, d1 = self.domain
        r0, r1 = self.range
        span = d1 - d0
        values = np.asarray(value, dtype="float64")
        t = (values - d0) / span if span else np.full_like(values, 0.5)
        mapped = r0 + t * (r1 - r0)
        return float(mapped) if mapped.ndim == 0 else mapped

    def ticks(self, count: int = 10) -> List[float]:
        start, stop = self.domain
        if not (stop > start):
            return [float(start)]
        step = tick_increment(start, stop, count)
        if step > 0:
            first, last = math.ceil(start / step), math.floor(stop / step)
            return [float(i * step) for i in range(first, last + 1)]
        inverse = -step
        first, last = math.ceil(start * inverse), math.floor(stop * inverse)
        return [i / inverse for i in range(first, last + 1)]


class LogScale:
    def __init__(self, domain: Range, range_: Range) -> None:
        if domain[0] <= 0 or domain[1] <= 0:
            raise ValueError(f"Log scale domain must be strictly positive, got {domain}")
        self.domain = domain
        self.range = range_

    def __call__(self, value):
        l0, l1 = math.log10(self.domain[0]), math.log10(self.domain[1])
        r0, r1 = self.range
        span = l1 - l0
        logs = np.log10(np.asarray(value, dtype="float64"))
        t = (logs - l0) / span if span else np.full_like(logs, 0.5)
        mapped = r0 + t * (r1 - r0)
        return float(mapped) if mapped.ndim == 0 else mapped


class BandScale:
    """Categorical slots with equal inner and outer padding, centred in the range."""

    def __init__(self, domain: Sequence[str], range_: Range, padding: float = BAND_PADDING) -> None:
        self.domain = list(dict.fromkeys(domain))
        self.range = range_
        self.padding = padding
        r0, r1 = range_
        n = len(self.domain)
        self.step = (r1 - r0) / max(1.0, n - padding + padding * 2)
        self.bandwidth = self.step * (1 - padding)
        start = r0 + (r1 - r0 - self.step * (n - padding)) * 0.5
        self._positions: Dict[str, float] = {key: start + self.step * i for i, key in enumerate(self.domain)}

    def __call__(self, key: str) -> Optional[float]:
        return self._positions.get(key)


class RegionPalette:
    """Tableau-10 colors assigned by sorted region code, cycling past ten regions."""

    def __init__(self, regions: Iterable[str], palette: Sequence[str] = TABLEAU10) -> None:
        ordered = sorted(set(regions))
        self.colors: Dict[str, str] = {region: palette[i % len(palette)] for i, region in enumerate(ordered)}

    def __call__(self, region: str) -> str:
        return self.colors.get(region, LEGEND_ALL_SWATCH)


def build_linear_scale(values: Iterable[float], range_: Range) -> Optional[LinearScale]:
    """[0, max(values)] niced onto `range_`; None when there is nothing to scale."""
    data = [float(v) for v in values]
    if not data:
        return None
    return LinearScale(nice_linear(0.0, max(data)), range_)


def build_band_scale(keys: Sequence[str], range_: Range, padding: float = BAND_PADDING) -> Optional[BandScale]:
    if len(keys) == 0:
        return None
    return BandScale(keys, range_, padding)


def build_log_scale(values: Iterable[float], range_: Range) -> Optional[LogScale]:
    """[min, max] extended to powers of ten; values must be strictly positive."""
    data = [float(v) for v in values]
    if not data:
        return None
    return LogScale(nice_log(min(data), max(data)), range_)
