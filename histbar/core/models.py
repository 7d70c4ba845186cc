from __future__ import annotations

from dataclasses import asdict, dataclass, field
import math
from typing import Any


@dataclass(frozen=True)
class Bar:
    representative: float
    frequency: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Histogram:
    bin_width: float
    bars: tuple[Bar, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.bars

    @property
    def total(self) -> int:
        return sum(bar.frequency for bar in self.bars)

    def to_dict(self) -> dict[str, Any]:
        # JSON has no NaN; an empty histogram reports a null width.
        bin_width = None if math.isnan(self.bin_width) else self.bin_width
        return {
            "bin_width": bin_width,
            "bars": [bar.to_dict() for bar in self.bars],
        }
