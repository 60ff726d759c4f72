from uncflow.register import Register
from uncflow.skylake.rdt import (
    IA32_PQR_ASSOC,
    LLC_OCCUPANCY,
    PqrAssoc,
    QmEventSelect,
)


def test_qm_event_select_round_trip():
    evtsel = QmEventSelect(rmid=42, event_id=LLC_OCCUPANCY)
    decoded = QmEventSelect.from_msr_value(evtsel.to_msr_value())
    assert decoded.rmid == evtsel.rmid
    assert decoded.event_id == evtsel.event_id


def test_qm_event_select_encoding():
    assert QmEventSelect(rmid=42, event_id=1).to_msr_value() == 0x1_0000_002A


def test_qm_event_select_decode_ignores_reserved_bits():
    decoded = QmEventSelect.from_msr_value(0xFFFF_FF03_0000_0007)
    assert decoded == QmEventSelect(rmid=7, event_id=3)


def test_pqr_assoc_round_trip():
    pqr = PqrAssoc(rmid=10, cos=5)
    decoded = PqrAssoc.from_msr_value(pqr.to_msr_value())
    assert decoded.rmid == pqr.rmid
    assert decoded.cos == pqr.cos


def test_pqr_assoc_full_width_fields():
    pqr = PqrAssoc(rmid=0xFFFFFFFF, cos=0xFFFFFFFF)
    assert pqr.to_msr_value() == 0xFFFF_FFFF_FFFF_FFFF
    assert PqrAssoc.from_msr_value(pqr.to_msr_value()) == pqr


def test_pqr_assoc_in_register():
    reg = Register.with_address(IA32_PQR_ASSOC, PqrAssoc)
    assert reg.to_msr_value() == 0
    reg.load_msr_value((5 << 32) | 10)
    assert reg.layout == PqrAssoc(rmid=10, cos=5)