from histbar.analysis.binning import (
    BinWidthError,
    HistogramError,
    InvalidNumberError,
    TooManyBinsError,
    build_histogram,
    parse_samples,
)
from histbar.analysis.plots import bar_length, display_precision, present_histogram

__all__ = [
    "BinWidthError",
    "HistogramError",
    "InvalidNumberError",
    "TooManyBinsError",
    "bar_length",
    "build_histogram",
    "display_precision",
    "parse_samples",
    "present_histogram",
]
