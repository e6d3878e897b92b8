"""Calorimeter hit record carrying dual-readout photon counts."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping

FINE_NBIN = 40
COARSE_NBIN = 4

_TIME_ARRAYS = (
    "ncertime",
    "nscinttime",
    "ncertimez",
    "nscinttimez",
    "edeptime",
    "ereldeptime",
)


def _normalise(
    cls: type, data: Mapping[str, Any], aliases: Mapping[str, str]
) -> dict[str, Any]:
    """Map alias keys to field names and reject keys the class does not know."""
    known = {f.name for f in fields(cls)}
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = aliases.get(key, key)
        if name not in known:
            raise ValueError(f"unknown {cls.__name__} field: {key!r}")
        if name in result:
            raise ValueError(f"{cls.__name__} field given twice: {name!r}")
        result[name] = value
    return result


@dataclass
class Contribution:
    """One Monte-Carlo particle's share of a hit."""

    track_id: int = -1
    pdg_id: int = 0
    deposit: float = 0.0
    time: float = 0.0
    length: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    _ALIASES = {"trackID": "track_id", "pdgID": "pdg_id"}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Contribution":
        """Build a contribution from a mapping of its fields."""
        return cls(**_normalise(cls, data, cls._ALIASES))


def _zeros_int() -> list[int]:
    return [0] * FINE_NBIN


def _zeros_float() -> list[float]:
    return [0.0] * FINE_NBIN


@dataclass
class DualCrysCalorimeterHit:
    """A calorimeter cell hit with energy, photon counts and timing profiles."""

    cell_id: int = 0
    energy_deposit: float = 0.0
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    truth: list[Contribution] = field(default_factory=list)
    n_inelastic: int = 0
    ncerenkov: int = 0
    nscintillator: int = 0
    edeprelativistic: float = 0.0
    edepepgam: float = 0.0
    wavelenmin: float = 300.0
    wavelenmax: float = 1000.0
    nfinebin: int = FINE_NBIN
    timemin: float = 0.0
    timemax: float = 400.0
    timemaxz: float = 40.0
    ncertime: list[int] = field(default_factory=_zeros_int)
    nscinttime: list[int] = field(default_factory=_zeros_int)
    ncertimez: list[int] = field(default_factory=_zeros_int)
    nscinttimez: list[int] = field(default_factory=_zeros_int)
    edeptime: list[float] = field(default_factory=_zeros_float)
    ereldeptime: list[float] = field(default_factory=_zeros_float)
    xmax: float = 10.0
    ymax: float = 10.0
    xmin: float = -10.0
    ymin: float = -10.0
    ncoarsebin: int = COARSE_NBIN
    contrib_beta: list[float] = field(default_factory=list)
    contrib_charge: list[float] = field(default_factory=list)

    _ALIASES = {
        "cellID": "cell_id",
        "energyDeposit": "energy_deposit",
        "contribBeta": "contrib_beta",
        "contribCharge": "contrib_charge",
    }

    def __post_init__(self) -> None:
        position = tuple(float(v) for v in self.position)
        if len(position) != 3:
            raise ValueError(f"position needs 3 coordinates, got {len(position)}")
        self.position = position  # type: ignore[assignment]
        self.truth = [
            c if isinstance(c, Contribution) else Contribution.from_dict(c)
            for c in self.truth
        ]
        for name in _TIME_ARRAYS:
            values = list(getattr(self, name))
            if len(values) != self.nfinebin:
                raise ValueError(
                    f"{name} has {len(values)} bins, expected {self.nfinebin}"
                )
            setattr(self, name, values)
        self.contrib_beta = [float(v) for v in self.contrib_beta]
        self.contrib_charge = [float(v) for v in self.contrib_charge]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DualCrysCalorimeterHit":
        """Build a hit from a mapping, accepting the original field spellings too."""
        return cls(**_normalise(cls, data, cls._ALIASES))

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping of the hit, suitable for JSON."""
        result = asdict(self)
        result["position"] = list(self.position)
        return result