"""Fixed-binning one- and two-dimensional histograms."""

from __future__ import annotations

import math
from typing import Any, Mapping


def _check_axis(nbins: int, low: float, high: float) -> None:
    if nbins < 1:
        raise ValueError(f"number of bins must be positive: {nbins}")
    if not high > low:
        raise ValueError(f"upper edge {high} must exceed lower edge {low}")


def _locate(x: float, nbins: int, low: float, high: float) -> int:
    """Storage index of ``x``: 0 underflow, 1..nbins in range, nbins+1 overflow."""
    if math.isnan(x) or x >= high:
        return nbins + 1
    if x < low:
        return 0
    index = int(nbins * (x - low) / (high - low))
    return min(index, nbins - 1) + 1


class Hist1D:
    """A one-dimensional histogram with underflow and overflow bins."""

    def __init__(self, name: str, title: str, nbins: int, low: float, high: float) -> None:
        _check_axis(nbins, low, high)
        self.name = name
        self.title = title
        self.nbins = int(nbins)
        self.low = float(low)
        self.high = float(high)
        self._content = [0.0] * (self.nbins + 2)
        self.entries = 0
        self._sumw = 0.0
        self._sumwx = 0.0
        self._sumwx2 = 0.0

    def fill(self, x: float, weight: float = 1.0) -> None:
        """Add ``weight`` to the bin holding ``x``."""
        x = float(x)
        index = _locate(x, self.nbins, self.low, self.high)
        self._content[index] += weight
        self.entries += 1
        if 1 <= index <= self.nbins:
            self._sumw += weight
            self._sumwx += weight * x
            self._sumwx2 += weight * x * x

    @property
    def contents(self) -> list[float]:
        return self._content[1:-1]

    @property
    def underflow(self) -> float:
        return self._content[0]

    @property
    def overflow(self) -> float:
        return self._content[-1]

    @property
    def edges(self) -> list[float]:
        width = (self.high - self.low) / self.nbins
        return [self.low + i * width for i in range(self.nbins + 1)]

    def mean(self) -> float:
        """Weighted mean of the in-range values filled."""
        if self._sumw == 0:
            return 0.0
        return self._sumwx / self._sumw

    def rms(self) -> float:
        """Weighted standard deviation of the in-range values filled."""
        if self._sumw == 0:
            return 0.0
        mean = self._sumwx / self._sumw
        return math.sqrt(max(self._sumwx2 / self._sumw - mean * mean, 0.0))

    def maximum(self) -> float:
        """Largest in-range bin content."""
        return max(self.contents)

    def maximum_bin(self) -> int:
        """Index, from zero, of the first in-range bin holding the maximum."""
        contents = self.contents
        return contents.index(max(contents))

    def bin_center(self, index: int) -> float:
        """Centre of the in-range bin ``index``, counted from zero."""
        if not 0 <= index < self.nbins:
            raise IndexError(f"bin {index} outside [0, {self.nbins})")
        width = (self.high - self.low) / self.nbins
        return self.low + (index + 0.5) * width

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "Hist1D",
            "name": self.name,
            "title": self.title,
            "nbins": self.nbins,
            "low": self.low,
            "high": self.high,
            "content": list(self._content),
            "entries": self.entries,
            "sumw": self._sumw,
            "sumwx": self._sumwx,
            "sumwx2": self._sumwx2,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Hist1D":
        hist = cls(data["name"], data["title"], data["nbins"], data["low"], data["high"])
        content = [float(v) for v in data["content"]]
        if len(content) != hist.nbins + 2:
            raise ValueError(
                f"content has {len(content)} values, expected {hist.nbins + 2}"
            )
        hist._content = content
        hist.entries = int(data["entries"])
        hist._sumw = float(data["sumw"])
        hist._sumwx = float(data["sumwx"])
        hist._sumwx2 = float(data["sumwx2"])
        return hist

    def __repr__(self) -> str:
        return f"Hist1D({self.name!r}, nbins={self.nbins}, entries={self.entries})"


class Hist2D:
    """A two-dimensional histogram with flow bins on both axes."""

    def __init__(
        self,
        name: str,
        title: str,
        nxbins: int,
        xlow: float,
        xhigh: float,
        nybins: int,
        ylow: float,
        yhigh: float,
    ) -> None:
        _check_axis(nxbins, xlow, xhigh)
        _check_axis(nybins, ylow, yhigh)
        self.name = name
        self.title = title
        self.nxbins = int(nxbins)
        self.xlow = float(xlow)
        self.xhigh = float(xhigh)
        self.nybins = int(nybins)
        self.ylow = float(ylow)
        self.yhigh = float(yhigh)
        self._content = [[0.0] * (self.nybins + 2) for _ in range(self.nxbins + 2)]
        self.entries = 0

    def fill(self, x: float, y: float, weight: float = 1.0) -> None:
        """Add ``weight`` to the cell holding ``(x, y)``."""
        ix = _locate(float(x), self.nxbins, self.xlow, self.xhigh)
        iy = _locate(float(y), self.nybins, self.ylow, self.yhigh)
        self._content[ix][iy] += weight
        self.entries += 1

    @property
    def contents(self) -> list[list[float]]:
        """In-range contents indexed ``[ix][iy]``."""
        return [row[1:-1] for row in self._content[1:-1]]

    @property
    def x_edges(self) -> list[float]:
        width = (self.xhigh - self.xlow) / self.nxbins
        return [self.xlow + i * width for i in range(self.nxbins + 1)]

    @property
    def y_edges(self) -> list[float]:
        width = (self.yhigh - self.ylow) / self.nybins
        return [self.ylow + i * width for i in range(self.nybins + 1)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "Hist2D",
            "name": self.name,
            "title": self.title,
            "nxbins": self.nxbins,
            "xlow": self.xlow,
            "xhigh": self.xhigh,
            "nybins": self.nybins,
            "ylow": self.ylow,
            "yhigh": self.yhigh,
            "content": [list(row) for row in self._content],
            "entries": self.entries,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Hist2D":
        hist = cls(
            data["name"],
            data["title"],
            data["nxbins"],
            data["xlow"],
            data["xhigh"],
            data["nybins"],
            data["ylow"],
            data["yhigh"],
        )
        content = [[float(v) for v in row] for row in data["content"]]
        if len(content) != hist.nxbins + 2 or any(
            len(row) != hist.nybins + 2 for row in content
        ):
            raise ValueError("content shape does not match the binning")
        hist._content = content
        hist.entries = int(data["entries"])
        return hist

    def __repr__(self) -> str:
        return f"Hist2D({self.name!r}, {self.nxbins}x{self.nybins}, entries={self.entries})"