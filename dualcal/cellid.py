"""Decoding and encoding of the detector cell identifiers.

Three layouts are used: the crystal ECAL, the fibre-tube HCAL and the
sampling HCAL.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class EcalSlice(IntEnum):
    """Slice numbers of the dual-readout crystal ECAL."""

    AIR = 0
    PD1 = 1
    CRYSTAL1 = 2
    GAP1 = 3
    MIDDLEMAT = 4
    GAP2 = 5
    CRYSTAL2 = 6
    PD2 = 7


class SampSlice(IntEnum):
    """Slice numbers of the sampling HCAL."""

    AIR = 0
    IRON = 1
    PD1 = 2
    PS = 3
    PD2 = 4
    PD3 = 5
    QUARTZ = 6
    PD4 = 7
    SEP1 = 8
    SEP2 = 9


_ECAL_CRYSTALS = frozenset({EcalSlice.CRYSTAL1, EcalSlice.CRYSTAL2})
_ECAL_PHOTODETECTORS = frozenset({EcalSlice.PD1, EcalSlice.PD2})
_SAMP_SCINT_PD = frozenset({SampSlice.PD1, SampSlice.PD2})
_SAMP_CER_PD = frozenset({SampSlice.PD3, SampSlice.PD4})
_SAMP_ABSORBER = frozenset({SampSlice.IRON, SampSlice.SEP1, SampSlice.SEP2})


def _check(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name}={value} outside [{low}, {high}]")


@dataclass(frozen=True)
class EcalCell:
    """Fields of a crystal ECAL cell id."""

    idet: int
    ix: int
    iy: int
    islice: int
    ilayer: int

    @property
    def slice_kind(self) -> EcalSlice:
        return EcalSlice(self.islice)

    @property
    def is_crystal(self) -> bool:
        return self.islice in _ECAL_CRYSTALS

    @property
    def is_photodetector(self) -> bool:
        return self.islice in _ECAL_PHOTODETECTORS


@dataclass(frozen=True)
class FiberCell:
    """Fields of a fibre-tube HCAL cell id."""

    idet: int
    ilayer: int
    itube: int
    iair: int
    itype: int

    @property
    def ifiber(self) -> int:
        """1 for a scintillating fibre, 2 for a quartz fibre, else 0."""
        return self.itype if self.itype in (1, 2) else 0

    @property
    def iphdet(self) -> int:
        """1 for the scintillation photodetector, 2 for the Cherenkov one, else 0."""
        return {3: 1, 4: 2}.get(self.itype, 0)

    @property
    def is_absorber(self) -> bool:
        return self.itype == 0 and self.iair == 0 and self.itube != 0

    @property
    def is_hole(self) -> bool:
        return (self.iair in (1, 2) and self.itype == 0) or self.itube == 0

    @property
    def ix(self) -> int:
        return self.itube

    @property
    def iy(self) -> int:
        return self.ilayer


@dataclass(frozen=True)
class SamplingCell:
    """Fields of a sampling HCAL cell id."""

    idet: int
    iy: int
    ix: int
    ilayer: int
    ibox2: int
    islice: int

    @property
    def slice_kind(self) -> SampSlice | None:
        try:
            return SampSlice(self.islice)
        except ValueError:
            return None

    @property
    def is_scintillator(self) -> bool:
        return self.islice == SampSlice.PS

    @property
    def is_quartz(self) -> bool:
        return self.islice == SampSlice.QUARTZ

    @property
    def is_absorber(self) -> bool:
        return self.islice in _SAMP_ABSORBER

    @property
    def is_scint_photodetector(self) -> bool:
        return self.islice in _SAMP_SCINT_PD

    @property
    def is_cer_photodetector(self) -> bool:
        return self.islice in _SAMP_CER_PD

    @property
    def is_photodetector(self) -> bool:
        return self.is_scint_photodetector or self.is_cer_photodetector


def _signed6(value: int) -> int:
    return value - 64 if value > 32 else value


def decode_ecal(cell_id: int) -> EcalCell:
    """Split a crystal ECAL cell id into its fields."""
    return EcalCell(
        idet=cell_id & 0x07,
        ix=_signed6((cell_id >> 3) & 0x3F),
        iy=_signed6((cell_id >> 10) & 0x3F),
        islice=(cell_id >> 17) & 0x07,
        ilayer=(cell_id >> 20) & 0x07,
    )


def encode_ecal(idet: int, ix: int, iy: int, islice: int, ilayer: int) -> int:
    """Build a crystal ECAL cell id from its fields."""
    _check("idet", idet, 0, 7)
    _check("ix", ix, -31, 32)
    _check("iy", iy, -31, 32)
    _check("islice", islice, 0, 7)
    _check("ilayer", ilayer, 0, 7)
    return (
        idet
        | (ix & 0x3F) << 3
        | (iy & 0x3F) << 10
        | islice << 17
        | ilayer << 20
    )


def decode_fiber_hcal(cell_id: int) -> FiberCell:
    """Split a fibre-tube HCAL cell id into its fields."""
    return FiberCell(
        idet=cell_id & 0xFF,
        ilayer=(cell_id >> 8) & 0xFFF,
        itube=(cell_id >> 20) & 0xFFF,
        iair=(cell_id >> 32) & 0x7,
        itype=(cell_id >> 35) & 0x7,
    )


def encode_fiber_hcal(idet: int, ilayer: int, itube: int, iair: int, itype: int) -> int:
    """Build a fibre-tube HCAL cell id from its fields."""
    _check("idet", idet, 0, 0xFF)
    _check("ilayer", ilayer, 0, 0xFFF)
    _check("itube", itube, 0, 0xFFF)
    _check("iair", iair, 0, 7)
    _check("itype", itype, 0, 7)
    return idet | ilayer << 8 | itube << 20 | iair << 32 | itype << 35


def decode_sampling_hcal(cell_id: int) -> SamplingCell:
    """Split a sampling HCAL cell id into its fields."""
    return SamplingCell(
        idet=cell_id & 0x07,
        iy=(cell_id >> 3) & 0xFFF,
        ix=(cell_id >> 15) & 0xFFF,
        ilayer=(cell_id >> 27) & 0xFFF,
        ibox2=(cell_id >> 39) & 0x03,
        islice=(cell_id >> 41) & 0xF,
    )


def encode_sampling_hcal(
    idet: int, iy: int, ix: int, ilayer: int, ibox2: int, islice: int
) -> int:
    """Build a sampling HCAL cell id from its fields."""
    _check("idet", idet, 0, 7)
    _check("iy", iy, 0, 0xFFF)
    _check("ix", ix, 0, 0xFFF)
    _check("ilayer", ilayer, 0, 0xFFF)
    _check("ibox2", ibox2, 0, 3)
    _check("islice", islice, 0, 0xF)
    return (
        idet
        | iy << 3
        | ix << 15
        | ilayer << 27
        | ibox2 << 39
        | islice << 41
    )