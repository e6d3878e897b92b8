import pytest

from dualcal.cellid import (
    EcalSlice,
    SampSlice,
    decode_ecal,
    decode_fiber_hcal,
    decode_sampling_hcal,
    encode_ecal,
    encode_fiber_hcal,
    encode_sampling_hcal,
)


@pytest.mark.parametrize(
    "fields",
    [(5, 0, 0, 2, 0), (5, -31, 32, 6, 1), (7, 32, -31, 7, 7), (0, -1, 1, 0, 3)],
)
def test_ecal_round_trip(fields):
    idet, ix, iy, islice, ilayer = fields
    cell = decode_ecal(encode_ecal(idet, ix, iy, islice, ilayer))
    assert (cell.idet, cell.ix, cell.iy, cell.islice, cell.ilayer) == fields


def test_ecal_field_positions():
    assert decode_ecal(1 << 17).islice == 1
    assert decode_ecal(3 << 20).ilayer == 3
    assert decode_ecal(5).idet == 5


def test_ecal_negative_index():
    assert decode_ecal(63 << 3).ix == -1
    assert decode_ecal(32 << 10).iy == 32


def test_ecal_slice_kinds():
    crystal = decode_ecal(encode_ecal(5, 0, 0, EcalSlice.CRYSTAL2, 0))
    assert crystal.is_crystal and not crystal.is_photodetector
    assert crystal.slice_kind is EcalSlice.CRYSTAL2
    pd = decode_ecal(encode_ecal(5, 0, 0, EcalSlice.PD1, 0))
    assert pd.is_photodetector and not pd.is_crystal


def test_ecal_out_of_range():
    with pytest.raises(ValueError):
        encode_ecal(5, 33, 0, 0, 0)
    with pytest.raises(ValueError):
        encode_ecal(8, 0, 0, 0, 0)


@pytest.mark.parametrize(
    "fields", [(6, 0, 0, 0, 0), (6, 4095, 4095, 7, 7), (255, 12, 34, 1, 4)]
)
def test_fiber_round_trip(fields):
    cell = decode_fiber_hcal(encode_fiber_hcal(*fields))
    assert (cell.idet, cell.ilayer, cell.itube, cell.iair, cell.itype) == fields


def test_fiber_classification():
    scint = decode_fiber_hcal(encode_fiber_hcal(6, 3, 5, 0, 1))
    assert scint.ifiber == 1 and scint.iphdet == 0 and not scint.is_absorber
    quartz = decode_fiber_hcal(encode_fiber_hcal(6, 3, 5, 0, 2))
    assert quartz.ifiber == 2
    assert decode_fiber_hcal(encode_fiber_hcal(6, 3, 5, 0, 3)).iphdet == 1
    assert decode_fiber_hcal(encode_fiber_hcal(6, 3, 5, 0, 4)).iphdet == 2
    absorber = decode_fiber_hcal(encode_fiber_hcal(6, 3, 5, 0, 0))
    assert absorber.is_absorber and not absorber.is_hole
    hole = decode_fiber_hcal(encode_fiber_hcal(6, 3, 5, 1, 0))
    assert hole.is_hole and not hole.is_absorber
    tube0 = decode_fiber_hcal(encode_fiber_hcal(6, 3, 0, 0, 0))
    assert tube0.is_hole and not tube0.is_absorber
    assert (absorber.ix, absorber.iy) == (5, 3)


def test_fiber_out_of_range():
    with pytest.raises(ValueError):
        encode_fiber_hcal(256, 0, 0, 0, 0)


@pytest.mark.parametrize(
    "fields", [(6, 0, 0, 0, 0, 3), (7, 4095, 4095, 4095, 3, 15), (6, 10, 20, 30, 1, 6)]
)
def test_sampling_round_trip(fields):
    cell = decode_sampling_hcal(encode_sampling_hcal(*fields))
    assert (cell.idet, cell.iy, cell.ix, cell.ilayer, cell.ibox2, cell.islice) == fields


def test_sampling_classification():
    ps = decode_sampling_hcal(encode_sampling_hcal(6, 1, 1, 1, 0, SampSlice.PS))
    assert ps.is_scintillator and not ps.is_quartz
    quartz = decode_sampling_hcal(encode_sampling_hcal(6, 1, 1, 1, 0, SampSlice.QUARTZ))
    assert quartz.is_quartz
    for s in (SampSlice.IRON, SampSlice.SEP1, SampSlice.SEP2):
        assert decode_sampling_hcal(encode_sampling_hcal(6, 0, 0, 0, 0, s)).is_absorber
    pd3 = decode_sampling_hcal(encode_sampling_hcal(6, 0, 0, 0, 0, SampSlice.PD3))
    assert pd3.is_cer_photodetector and pd3.is_photodetector
    assert not pd3.is_scint_photodetector
    unknown = decode_sampling_hcal(encode_sampling_hcal(6, 0, 0, 0, 0, 12))
    assert unknown.slice_kind is None


def test_sampling_out_of_range():
    with pytest.raises(ValueError):
        encode_sampling_hcal(6, 0, 0, 0, 4, 0)