"""Energy resolution versus beam energy.

For each beam energy, a Gaussian is fitted to selected histograms of the
analysis output. The relative widths are then fitted with the calorimeter
resolution function ``sqrt(a^2/E + b^2/E^2 + c^2)`` and drawn together.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Union

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from scipy.optimize import curve_fit

from .histogram import Hist1D

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]

DEFAULT_TYPE = "FSCEPonly"
DEFAULT_DIRECTORY = "./output"
DEFAULT_ENERGIES = (10.0, 15.0, 20.0, 25.0, 30.0, 35.0, 40.0, 45.0)
DEFAULT_OUTFILE = "resolution.png"
FIT_RANGE_RMS = 1.5
DEFAULT_P0 = (0.5, 0.5, 0.5)

HIST_NAMES = ("phcHcalncer", "phcHcalnscint", "phcHcalcorr", "phcEdgeR", "hpdepcal")

# hist name -> (legend label, colour, marker); the last histogram is fitted only
_DRAWN = {
    "phcHcalncer": ("ncer", "blue", "s"),
    "phcHcalnscint": ("nscint", "green", "v"),
    "phcHcalcorr": ("dual", "red", "v"),
    "phcEdgeR": ("escaping", "magenta", "v"),
}

# digitised sigma90 resolutions of a 40-layer reference calorimeter
_REFERENCE_ENERGIES = (5.0, 10.0, 20.0, 40.0)
_REFERENCE_SCINT = (0.32, 0.23, 0.195, 0.17)
_REFERENCE_CER = (0.44, 0.29, 0.275, 0.26)
_SIGMA90_TO_SIGMA = 1.25

_DPI = 100
_WIDTH = 700
_HEIGHT = 500


@dataclass(frozen=True)
class GaussFit:
    """Result of a Gaussian fit to a histogram."""

    constant: float
    mean: float
    sigma: float
    low: float
    high: float

    @property
    def resolution(self) -> float:
        """Relative width ``sigma / mean``, or 0 when the mean is 0."""
        return self.sigma / self.mean if self.mean != 0 else 0.0


@dataclass(frozen=True)
class ResolutionFit:
    """Parameters of ``sqrt(a^2/x + b^2/x^2 + c^2)`` and the points fitted."""

    a: float
    b: float
    c: float
    energies: tuple[float, ...] = field(default=())
    resolutions: tuple[float, ...] = field(default=())

    def __call__(self, x):
        return resolution_function(x, self.a, self.b, self.c)


def plot_name(input_filename: str, histname: str) -> str:
    """Name of the fit plot: histogram name, file stem and ``.png``.

    The last five characters (the extension) and the leading directory of
    ``input_filename`` are dropped.
    """
    if len(input_filename) < 5:
        raise ValueError(f"file name too short: {input_filename!r}")
    stem = os.path.basename(input_filename[:-5])
    return f"{histname}-{stem}.png"


def load_histogram(path: PathLike, name: str) -> Hist1D:
    """Read the one-dimensional histogram ``name`` from a histogram file."""
    with open(path, encoding="utf-8") as stream:
        data = json.load(stream)
    if name not in data:
        raise KeyError(f"no histogram {name!r} in {os.fspath(path)}")
    entry = data[name]
    if entry.get("kind", "Hist1D") != "Hist1D":
        raise TypeError(f"histogram {name!r} is a {entry['kind']}, not a Hist1D")
    return Hist1D.from_dict(entry)


def _gauss(x, constant, mean, sigma):
    return constant * np.exp(-0.5 * ((x - mean) / sigma) ** 2)


def fit_histogram(hist: Hist1D) -> GaussFit:
    """Fit a Gaussian within 1.5 RMS of the histogram mean."""
    mean = hist.mean()
    rms = hist.rms()
    low = mean - FIT_RANGE_RMS * rms
    high = mean + FIT_RANGE_RMS * rms
    centers = np.array([hist.bin_center(i) for i in range(hist.nbins)])
    contents = np.asarray(hist.contents, dtype=float)
    selected = (centers >= low) & (centers <= high) & (contents > 0)
    if np.count_nonzero(selected) < 3:
        raise ValueError(f"too few filled bins to fit {hist.name!r}")
    x = centers[selected]
    y = contents[selected]
    try:
        params, _ = curve_fit(
            _gauss,
            x,
            y,
            p0=(float(y.max()), mean, rms),
            sigma=np.sqrt(y),
            absolute_sigma=True,
            maxfev=10000,
        )
    except RuntimeError as exc:
        raise ValueError(f"Gaussian fit of {hist.name!r} failed: {exc}") from exc
    constant, fit_mean, sigma = (float(p) for p in params)
    logger.info("fit parameters are %g %g %g", constant, fit_mean, abs(sigma))
    return GaussFit(constant, fit_mean, abs(sigma), low, high)


def resolution_function(x, a, b, c):
    """Calorimeter resolution ``sqrt(a^2/x + b^2/x^2 + c^2)``."""
    x = np.asarray(x, dtype=float)
    value = np.sqrt(a * a / x + b * b / x / x + c * c)
    return float(value) if value.ndim == 0 else value


def fit_resolution_curve(
    energies: Sequence[float],
    resolutions: Sequence[float],
    p0: Sequence[float] = DEFAULT_P0,
) -> ResolutionFit:
    """Fit the resolution function to resolutions measured at given energies."""
    x = np.asarray(energies, dtype=float)
    y = np.asarray(resolutions, dtype=float)
    if x.shape != y.shape:
        raise ValueError("energies and resolutions differ in length")
    if x.size < 3:
        raise ValueError("at least three points are needed for the fit")
    try:
        params, _ = curve_fit(
            lambda e, a, b, c: resolution_function(e, a, b, c),
            x,
            y,
            p0=tuple(p0),
            maxfev=20000,
        )
    except RuntimeError as exc:
        raise ValueError(f"resolution fit failed: {exc}") from exc
    a, b, c = (abs(float(p)) for p in params)
    return ResolutionFit(a, b, c, tuple(x.tolist()), tuple(y.tolist()))


def _hist_path(directory: str, aatype: str, energy: float) -> str:
    return f"{directory}/hists_{aatype}_{energy:g}GeV.json"


def _new_figure() -> tuple[Figure, object]:
    figure = Figure(figsize=(_WIDTH / _DPI, _HEIGHT / _DPI), dpi=_DPI)
    FigureCanvasAgg(figure)
    return figure, figure.add_subplot(1, 1, 1)


def _draw_fit(hist: Hist1D, fit: GaussFit, path: Path) -> None:
    figure, axes = _new_figure()
    axes.stairs(hist.contents, hist.edges, color="black", linewidth=1)
    x = np.linspace(fit.low, fit.high, 200)
    axes.plot(x, _gauss(x, fit.constant, fit.mean, fit.sigma), color="red")
    axes.set_title(hist.title)
    axes.text(
        0.98,
        0.98,
        f"constant {fit.constant:.4g}\nmean {fit.mean:.4g}\nsigma {fit.sigma:.4g}",
        transform=axes.transAxes,
        ha="right",
        va="top",
        fontsize=7,
    )
    figure.savefig(path, format="png", dpi=_DPI)


def _reference_fits() -> tuple[ResolutionFit, ResolutionFit]:
    logger.info("reference numbers: energy, raw scint, corr scint, raw cer, corr cer")
    for energy, scint, cer in zip(_REFERENCE_ENERGIES, _REFERENCE_SCINT, _REFERENCE_CER):
        logger.info(
            "    %g %g %g %g %g",
            energy,
            scint,
            scint * _SIGMA90_TO_SIGMA,
            cer,
            cer * _SIGMA90_TO_SIGMA,
        )
    scint = [v * _SIGMA90_TO_SIGMA for v in _REFERENCE_SCINT]
    cer = [v * _SIGMA90_TO_SIGMA for v in _REFERENCE_CER]
    return (
        fit_resolution_curve(_REFERENCE_ENERGIES, scint),
        fit_resolution_curve(_REFERENCE_ENERGIES, cer),
    )


def run_res(
    aatype: str = DEFAULT_TYPE,
    directory: str = DEFAULT_DIRECTORY,
    energies: Sequence[float] = DEFAULT_ENERGIES,
    outfile: PathLike = DEFAULT_OUTFILE,
) -> dict[str, ResolutionFit]:
    """Fit every histogram at every energy and draw the resolution curves.

    The per-fit plots are written next to ``outfile``.
    """
    energies = [float(e) for e in energies]
    plot_dir = Path(outfile).parent
    fits: dict[str, ResolutionFit] = {}
    for name in HIST_NAMES:
        resolutions = []
        for energy in energies:
            path = _hist_path(directory, aatype, energy)
            logger.info("fitting %s at energy %g", name, energy)
            hist = load_histogram(path, name)
            gauss = fit_histogram(hist)
            _draw_fit(hist, gauss, plot_dir / plot_name(path, name))
            resolutions.append(gauss.resolution)
        fits[name] = fit_resolution_curve(energies, resolutions)
        logger.info("%s resolutions %s", name, resolutions)

    ref_scint, ref_cer = _reference_fits()
    logger.info("reference scint fit %s, cer fit %s", ref_scint, ref_cer)

    figure, axes = _new_figure()
    axes.set_xlim(0.0, 70.0)
    axes.set_ylim(0.0, 1.0)
    axes.set_xlabel("true energy (GeV)")
    axes.set_ylabel("percent resolution")
    axes.tick_params(labelsize=8)
    curve_x = np.linspace(0.5, 70.0, 400)
    for name, (label, colour, marker) in _DRAWN.items():
        fit = fits[name]
        axes.plot(fit.energies, fit.resolutions, linestyle="none", marker=marker,
                  color=colour, label=label)
        axes.plot(curve_x, fit(curve_x), color=colour, linewidth=1)
    axes.legend(loc="upper right", frameon=False, fontsize=8)
    figure.savefig(outfile, format="png", dpi=_DPI)
    return fits


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry: fit the resolutions and draw them."""
    parser = argparse.ArgumentParser(description="Resolution versus beam energy.")
    parser.add_argument("--type", default=DEFAULT_TYPE, help="detector type in file names")
    parser.add_argument("--directory", default=DEFAULT_DIRECTORY, help="histogram directory")
    parser.add_argument(
        "--energies",
        type=float,
        nargs="+",
        default=list(DEFAULT_ENERGIES),
        help="beam energies in GeV",
    )
    parser.add_argument("--output", default=DEFAULT_OUTFILE, help="output PNG file")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    fits = run_res(args.type, args.directory, args.energies, args.output)
    for name, fit in fits.items():
        print(f"{name}: a={fit.a:.4g} b={fit.b:.4g} c={fit.c:.4g}")
    return 0