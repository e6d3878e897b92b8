"""Drawing of histograms to PNG files.

Each function draws one canvas of 700 by 500 pixels, writes it to
``outfile`` as PNG and returns the figure so that it can be inspected or
saved again elsewhere.
"""

from __future__ import annotations

import os
from typing import Iterable, Union

import numpy as np
from matplotlib.axes import Axes
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .histogram import Hist1D, Hist2D

PathLike = Union[str, "os.PathLike[str]"]

CANVAS_WIDTH = 700
CANVAS_HEIGHT = 500
_DPI = 100
MAXIMUM_HEADROOM = 1.3


def _new_axes(title: str) -> tuple[Figure, Axes]:
    figure = Figure(figsize=(CANVAS_WIDTH / _DPI, CANVAS_HEIGHT / _DPI), dpi=_DPI)
    FigureCanvasAgg(figure)
    axes = figure.add_subplot(1, 1, 1)
    axes.set_title(title)
    axes.set_facecolor("white")
    return figure, axes


def _stats_text(hists: Iterable[Hist1D]) -> str:
    return "\n".join(
        f"{h.name}: entries {h.entries}  mean {h.mean():.4g}  rms {h.rms():.4g}"
        for h in hists
    )


def _draw_hist(axes: Axes, hist: Hist1D, color: str, linewidth: float) -> None:
    axes.stairs(hist.contents, hist.edges, color=color, linewidth=linewidth, label=hist.name)


def _finish(figure: Figure, axes: Axes, hists: list[Hist1D], outfile: PathLike) -> Figure:
    axes.text(
        0.98,
        0.98,
        _stats_text(hists),
        transform=axes.transAxes,
        ha="right",
        va="top",
        fontsize=7,
        bbox={"facecolor": "white", "edgecolor": "black", "linewidth": 0.5},
    )
    figure.savefig(outfile, format="png", dpi=_DPI)
    return figure


def _log_bottom(hists: Iterable[Hist1D]) -> float:
    positive = [v for h in hists for v in h.contents if v > 0]
    return min(positive) * 0.5 if positive else 0.5


def _set_scale(axes: Axes, hists: list[Hist1D], logy: bool) -> None:
    if logy:
        axes.set_yscale("log")
        axes.set_ylim(bottom=_log_bottom(hists))


def _set_maximum(axes: Axes, hists: list[Hist1D], maximum: float, logy: bool) -> None:
    top = maximum * MAXIMUM_HEADROOM
    if top <= 0:
        return
    if logy:
        bottom = _log_bottom(hists)
        if top > bottom:
            axes.set_ylim(bottom, top)
    else:
        axes.set_ylim(0.0, top)


def draw1(hist: Hist1D, outfile: PathLike, logy: bool = False) -> Figure:
    """Draw one histogram as a thin green line."""
    figure, axes = _new_axes(hist.title)
    _draw_hist(axes, hist, "green", 1)
    _set_scale(axes, [hist], logy)
    return _finish(figure, axes, [hist], outfile)


def draw2(h1: Hist1D, h2: Hist1D, outfile: PathLike, logy: bool = False) -> Figure:
    """Overlay two histograms, green and red, with room above the taller one."""
    hists = [h1, h2]
    figure, axes = _new_axes(h1.title)
    _draw_hist(axes, h1, "green", 3)
    _draw_hist(axes, h2, "red", 3)
    _set_scale(axes, hists, logy)
    _set_maximum(axes, hists, max(h1.maximum(), h2.maximum()), logy)
    return _finish(figure, axes, hists, outfile)


def draw3(
    h1: Hist1D, h2: Hist1D, h3: Hist1D, outfile: PathLike, logy: bool = False
) -> Figure:
    """Overlay three histograms, green, red and blue.

    The vertical range is set from the first two histograms only.
    """
    hists = [h1, h2, h3]
    figure, axes = _new_axes(h1.title)
    _draw_hist(axes, h1, "green", 3)
    _draw_hist(axes, h2, "red", 3)
    _draw_hist(axes, h3, "blue", 3)
    _set_scale(axes, hists, logy)
    _set_maximum(axes, hists, max(h1.maximum(), h2.maximum()), logy)
    return _finish(figure, axes, hists, outfile)


def draw_2d(
    hist: Hist2D, outfile: PathLike, eoh_s: float = 0.0, eoh_c: float = 0.0
) -> Figure:
    """Draw a 2-D histogram with a yellow line from ``(eoh_s, eoh_c)`` to ``(1, 1)``."""
    figure, axes = _new_axes(hist.title)
    contents = np.asarray(hist.contents, dtype=float).T
    masked = np.ma.masked_equal(contents, 0.0)
    axes.pcolormesh(hist.x_edges, hist.y_edges, masked, cmap="viridis", shading="flat")
    axes.plot([eoh_s, 1.0], [eoh_c, 1.0], color="yellow", linewidth=2)
    axes.set_xlim(hist.xlow, hist.xhigh)
    axes.set_ylim(hist.ylow, hist.yhigh)
    axes.text(
        0.98,
        0.98,
        f"{hist.name}: entries {hist.entries}",
        transform=axes.transAxes,
        ha="right",
        va="top",
        fontsize=7,
        bbox={"facecolor": "white", "edgecolor": "black", "linewidth": 0.5},
    )
    figure.savefig(outfile, format="png", dpi=_DPI)
    return figure