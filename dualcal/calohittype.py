"""Encoding and decoding of calorimeter hit type codes.

A type code packs four fields into one integer::

    calo_type + 10 * calo_id + 1000 * layout + 10000 * layer
"""

from __future__ import annotations

from enum import IntEnum

_F_CALO_TYPE = 1
_F_CALO_ID = 10
_F_LAYOUT = 1000
_F_LAYER = 10000


class CaloType(IntEnum):
    """Kind of calorimeter response."""

    EM = 0
    HAD = 1
    MUON = 2


class CaloID(IntEnum):
    """Calorimeter subsystem."""

    UNKNOWN = 0
    ECAL = 1
    HCAL = 2
    YOKE = 3
    LCAL = 4
    LHCAL = 5
    BCAL = 6


class Layout(IntEnum):
    """Calorimeter layout or sub-detector part."""

    ANY = 0
    BARREL = 1
    ENDCAP = 2
    PLUG = 3
    RING = 4


class CHT:
    """A calorimeter hit type code."""

    __slots__ = ("_value",)

    def __init__(self, value: int) -> None:
        self._value = int(value)

    @classmethod
    def encode(
        cls, calo_type: CaloType, calo_id: CaloID, layout: Layout, layer: int
    ) -> "CHT":
        """Build a type code from its fields."""
        if layer < 0:
            raise ValueError(f"layer must not be negative: {layer}")
        return cls(
            int(calo_type) * _F_CALO_TYPE
            + int(calo_id) * _F_CALO_ID
            + int(layout) * _F_LAYOUT
            + int(layer) * _F_LAYER
        )

    def calo_type(self) -> CaloType:
        return CaloType(self._value % _F_CALO_ID)

    def calo_id(self) -> CaloID:
        return CaloID((self._value % _F_LAYOUT) // _F_CALO_ID)

    def layout(self) -> Layout:
        return Layout((self._value % _F_LAYER) // _F_LAYOUT)

    def layer(self) -> int:
        return self._value // _F_LAYER

    def is_(self, value: CaloType | CaloID | Layout) -> bool:
        """Tell whether the matching field of this code equals ``value``."""
        if isinstance(value, CaloType):
            return self.calo_type() == value
        if isinstance(value, CaloID):
            return self.calo_id() == value
        if isinstance(value, Layout):
            return self.layout() == value
        raise TypeError(f"cannot compare a hit type with {type(value).__name__}")

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CHT):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"CHT({self._value})"

    def __str__(self) -> str:
        return (
            f"calo type: {self.calo_type().name.lower()}, "
            f"calo id: {self.calo_id().name.lower()}, "
            f"layout: {self.layout().name.lower()}, "
            f"layer: {self.layer()}"
        )


def layout_from_string(name: str) -> Layout:
    """Layout named in a collection name, or ``Layout.ANY`` if none is."""
    lowered = name.lower()
    for layout in (Layout.RING, Layout.PLUG, Layout.ENDCAP, Layout.BARREL):
        if layout.name.lower() in lowered:
            return layout
    return Layout.ANY


def calo_id_from_string(name: str) -> CaloID:
    """Calorimeter id named in a collection name, or ``CaloID.UNKNOWN``."""
    lowered = name.lower()
    for calo_id in (
        CaloID.LHCAL,
        CaloID.LCAL,
        CaloID.BCAL,
        CaloID.ECAL,
        CaloID.HCAL,
        CaloID.YOKE,
    ):
        if calo_id.name.lower() in lowered:
            return calo_id
    return CaloID.UNKNOWN


def calo_type_from_string(name: str) -> CaloType:
    """Calorimeter type named in a string, or ``CaloType.EM`` if none is."""
    lowered = name.lower()
    if "had" in lowered:
        return CaloType.HAD
    if "muon" in lowered:
        return CaloType.MUON
    return CaloType.EM