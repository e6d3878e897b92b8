# dualcal

Tools for a homogeneous dual-readout calorimeter test beam: a crystal ECAL
in front of either a fiber or a sampling HCAL. The package decodes the
detector cell identifiers, holds simulated hit records, fills and draws
histograms, and fits the energy resolution against the beam energy.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

- `dualcal.calohittype` — the `CHT` calorimeter hit type code
  (`caloType + 10*caloID + 1000*layout + 10000*layer`), with the `CaloType`,
  `CaloID` and `Layout` enums and helpers that guess them from a collection
  name (`layout_from_string`, `calo_id_from_string`, `calo_type_from_string`).
- `dualcal.cellid` — decoding and encoding of the cell identifiers of the
  crystal ECAL, the fiber HCAL and the sampling HCAL (`decode_ecal`,
  `decode_fiber_hcal`, `decode_sampling_hcal` and the matching `encode_*`
  functions), returning `EcalCell`, `FiberCell` and `SamplingCell`, with the
  `EcalSlice` and `SampSlice` slice numbering.
- `dualcal.hit` — the `DualCrysCalorimeterHit` record and its per-particle
  `Contribution` entries, convertible to and from plain dictionaries.
- `dualcal.histogram` — fixed-binning `Hist1D` and `Hist2D` histograms with
  underflow and overflow bins, mean, RMS, maximum and dictionary
  serialisation.
- `dualcal.plotting` — PNG drawings of one, two or three overlaid
  histograms (`draw1`, `draw2`, `draw3`) and of a 2-D histogram with a
  reference line (`draw_2d`).
- `dualcal.resve` — Gaussian fits of histograms (`fit_histogram`) and fits
  of the resolution curve `sqrt(a²/E + b²/E² + c²)`
  (`fit_resolution_curve`) over several beam energies (`run_res`).

## Library use

```python
from dualcal.calohittype import CHT, CaloType, CaloID, Layout
from dualcal.cellid import decode_ecal, encode_ecal
from dualcal.histogram import Hist1D

cht = CHT.encode(CaloType.EM, CaloID.ECAL, Layout.PLUG, 12)
print(cht.layer(), cht.is_(CaloID.ECAL))

cell = decode_ecal(encode_ecal(5, -3, 4, 2, 1))
print(cell, cell.is_crystal)

hist = Hist1D("h", "example", 10, 0.0, 1.0)
hist.fill(0.25)
print(hist.mean(), hist.maximum_bin())
```

## Command line

```
dualcal-resve --help
dualcal-resve --type FSCEPonly --directory ./output --energies 10 20 30 --output resolution.png
```

`dualcal-resve` reads `<directory>/hists_<type>_<E>GeV.json` for each beam
energy `E`. Each file is a JSON object mapping histogram names to
`Hist1D.to_dict()` entries; the histograms `phcHcalncer`, `phcHcalnscint`,
`phcHcalcorr`, `phcEdgeR` and `hpdepcal` are used. Every histogram is fitted
with a Gaussian within 1.5 RMS of its mean and a plot of each fit is written
next to the output file. The relative widths are then fitted with the
resolution curve, drawn into the output PNG, and the fitted `a`, `b`, `c`
are printed.

## What the package does not do

The package does not read simulation event files, run the electron and pion
calibration passes or compute the dual-readout correction from hit records.
The histogram files that `dualcal-resve` reads have to be produced
elsewhere, for instance by filling `Hist1D` objects and writing their
`to_dict()` output as JSON.