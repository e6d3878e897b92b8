import pytest

from dualcal.calohittype import (
    CHT,
    CaloID,
    CaloType,
    Layout,
    calo_id_from_string,
    calo_type_from_string,
    layout_from_string,
)


def test_encode_worked_example():
    cht = CHT.encode(CaloType.EM, CaloID.ECAL, Layout.PLUG, 12)
    assert int(cht) == 123010


@pytest.mark.parametrize("calo_type", list(CaloType))
@pytest.mark.parametrize("calo_id", list(CaloID))
@pytest.mark.parametrize("layout", list(Layout))
@pytest.mark.parametrize("layer", [0, 1, 12, 99])
def test_round_trip(calo_type, calo_id, layout, layer):
    cht = CHT.encode(calo_type, calo_id, layout, layer)
    decoded = CHT(int(cht))
    assert decoded.calo_type() == calo_type
    assert decoded.calo_id() == calo_id
    assert decoded.layout() == layout
    assert decoded.layer() == layer


def test_is_dispatches_on_field():
    cht = CHT.encode(CaloType.HAD, CaloID.HCAL, Layout.BARREL, 3)
    assert cht.is_(CaloType.HAD)
    assert not cht.is_(CaloType.EM)
    assert cht.is_(CaloID.HCAL)
    assert not cht.is_(CaloID.ECAL)
    assert cht.is_(Layout.BARREL)
    assert not cht.is_(Layout.ENDCAP)


def test_is_rejects_plain_int():
    with pytest.raises(TypeError):
        CHT(0).is_(1)


def test_negative_layer_rejected():
    with pytest.raises(ValueError):
        CHT.encode(CaloType.EM, CaloID.ECAL, Layout.ANY, -1)


def test_equality_and_str():
    cht = CHT.encode(CaloType.MUON, CaloID.YOKE, Layout.ENDCAP, 7)
    assert cht == CHT(int(cht))
    assert cht == int(cht)
    text = str(cht)
    assert "muon" in text and "yoke" in text and "endcap" in text and "7" in text


def test_layout_from_string():
    assert layout_from_string("EcalEndcapCollection") == Layout.ENDCAP
    assert layout_from_string("HCALBarrel") == Layout.BARREL
    assert layout_from_string("EcalPlugHits") == Layout.PLUG
    assert layout_from_string("HcalRing") == Layout.RING
    assert layout_from_string("Something") == Layout.ANY


def test_calo_id_from_string():
    assert calo_id_from_string("HCalBarrelCollection") == CaloID.HCAL
    assert calo_id_from_string("ECALEndcap") == CaloID.ECAL
    assert calo_id_from_string("LHCalHits") == CaloID.LHCAL
    assert calo_id_from_string("LCalHits") == CaloID.LCAL
    assert calo_id_from_string("BCal") == CaloID.BCAL
    assert calo_id_from_string("YokeBarrel") == CaloID.YOKE
    assert calo_id_from_string("tracker") == CaloID.UNKNOWN


def test_calo_type_from_string():
    assert calo_type_from_string("HadronicHits") == CaloType.HAD
    assert calo_type_from_string("MuonHits") == CaloType.MUON
    assert calo_type_from_string("whatever") == CaloType.EM