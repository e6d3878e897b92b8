import struct

import pytest
from matplotlib.colors import to_rgba

from dualcal.histogram import Hist1D, Hist2D
from dualcal.plotting import draw1, draw2, draw3, draw_2d

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _png_size(path):
    data = path.read_bytes()
    assert data[:8] == PNG_SIGNATURE
    return struct.unpack(">II", data[16:24])


def _hist(name, values):
    hist = Hist1D(name, "title " + name, 10, 0.0, 1.0)
    for value in values:
        hist.fill(value)
    return hist


def _step_patches(figure):
    return [p for p in figure.axes[0].patches if type(p).__name__ == "StepPatch"]


def test_draw1_writes_png_of_canvas_size(tmp_path):
    out = tmp_path / "one.png"
    draw1(_hist("a", [0.15, 0.25, 0.25]), out)
    assert _png_size(out) == (700, 500)


def test_draw1_green_line_and_linear_scale(tmp_path):
    figure = draw1(_hist("a", [0.5]), tmp_path / "one.png")
    patches = _step_patches(figure)
    assert len(patches) == 1
    assert patches[0].get_edgecolor() == to_rgba("green")
    assert figure.axes[0].get_yscale() == "linear"


def test_draw1_logy(tmp_path):
    figure = draw1(_hist("a", [0.5, 0.5]), tmp_path / "one.png", True)
    assert figure.axes[0].get_yscale() == "log"
    assert figure.axes[0].get_ylim()[0] > 0


def test_draw2_maximum_from_taller_histogram(tmp_path):
    h1 = _hist("a", [0.1, 0.1])
    h2 = _hist("b", [0.7, 0.7, 0.7, 0.7])
    figure = draw2(h1, h2, tmp_path / "two.png")
    bottom, top = figure.axes[0].get_ylim()
    assert bottom == 0.0
    assert top == pytest.approx(max(h1.maximum(), h2.maximum()) * 1.3)


def test_draw2_colors(tmp_path):
    figure = draw2(_hist("a", [0.1]), _hist("b", [0.2]), tmp_path / "two.png")
    colors = [p.get_edgecolor() for p in _step_patches(figure)]
    assert colors == [to_rgba("green"), to_rgba("red")]
    assert (tmp_path / "two.png").read_bytes()[:8] == PNG_SIGNATURE


def test_draw3_range_ignores_third(tmp_path):
    h1 = _hist("a", [0.1])
    h2 = _hist("b", [0.2, 0.2])
    h3 = _hist("c", [0.3] * 9)
    figure = draw3(h1, h2, h3, tmp_path / "three.png")
    assert figure.axes[0].get_ylim()[1] == pytest.approx(h2.maximum() * 1.3)
    colors = [p.get_edgecolor() for p in _step_patches(figure)]
    assert colors == [to_rgba("green"), to_rgba("red"), to_rgba("blue")]


def test_draw3_logy(tmp_path):
    h = _hist("a", [0.1, 0.2])
    figure = draw3(h, h, h, tmp_path / "three.png", True)
    assert figure.axes[0].get_yscale() == "log"
    assert _png_size(tmp_path / "three.png") == (700, 500)


def test_draw2_empty_histograms_still_written(tmp_path):
    out = tmp_path / "empty.png"
    draw2(_hist("a", []), _hist("b", []), out)
    assert _png_size(out) == (700, 500)


def test_draw_2d_line_and_limits(tmp_path):
    hist = Hist2D("h", "two d", 5, 0.0, 1.5, 5, 0.0, 1.5)
    hist.fill(0.5, 0.6)
    figure = draw_2d(hist, tmp_path / "2d.png", 0.2, 0.3)
    axes = figure.axes[0]
    line = axes.lines[0]
    assert line.get_xydata().tolist() == [[0.2, 0.3], [1.0, 1.0]]
    assert to_rgba(line.get_color()) == to_rgba("yellow")
    assert axes.get_xlim() == (0.0, 1.5)
    assert _png_size(tmp_path / "2d.png") == (700, 500)


def test_draw_2d_default_line_from_origin(tmp_path):
    hist = Hist2D("h", "two d", 4, 0.0, 2.0, 4, 0.0, 2.0)
    figure = draw_2d(hist, tmp_path / "2d.png")
    assert figure.axes[0].lines[0].get_xydata().tolist() == [[0.0, 0.0], [1.0, 1.0]]


def test_draw1_bad_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        draw1(_hist("a", [0.1]), tmp_path / "missing" / "out.png")