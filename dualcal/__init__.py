"""Cell ids, hit records, histograms and resolution fits for a dual-readout calorimeter."""

__version__ = "0.1.0"

__all__ = [
    "calohittype",
    "cellid",
    "histogram",
    "hit",
    "plotting",
    "resve",
]