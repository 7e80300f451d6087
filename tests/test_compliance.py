from portal.core.compliance import ComplianceStatus, can_book, compliance_status, progress
from portal.infrastructure import InMemoryRequirementRegistry


def _registry(**collections):
    return InMemoryRequirementRegistry(collections or {"background_checks": ["CRC"], "medical_documents": ["COVID-19"]})


def test_fresh_registry_has_no_status():
    registry = _registry()
    slots = registry.all_slots()
    assert compliance_status(slots) is ComplianceStatus.NO_STATUS
    assert not can_book(slots)
    assert progress(slots) == {"completed": 0, "total": 2, "percentage": 0}


def test_partial_uploads_fail():
    registry = _registry()
    registry.apply_commit({"COVID-19": [("covid.pdf", "2025-06-02")]})
    slots = registry.all_slots()
    assert compliance_status(slots) is ComplianceStatus.FAIL
    assert progress(slots) == {"completed": 1, "total": 2, "percentage": 50}
    assert not can_book(slots)


def test_all_slots_across_collections_pass():
    registry = _registry()
    registry.apply_commit({"COVID-19": [("covid.pdf", "")], "CRC": [("crc.pdf", "")]})
    assert compliance_status(registry.all_slots()) is ComplianceStatus.PASS
    assert can_book(registry.all_slots())

    registry.clear_slot("CRC")
    assert compliance_status(registry.all_slots()) is ComplianceStatus.FAIL
    assert not can_book(registry.all_slots())


def test_percentage_rounds_half_up():
    registry = _registry(medical_documents=[f"Slot {index}" for index in range(8)])
    registry.apply_commit({"Slot 0": [("a.pdf", "")]})
    assert progress(registry.all_slots())["percentage"] == 13

    registry = _registry(medical_documents=["A", "B", "C"])
    registry.apply_commit({"A": [("a.pdf", "")], "B": [("b.pdf", "")]})
    assert progress(registry.all_slots())["percentage"] == 67


def test_empty_catalog_has_no_status():
    assert compliance_status([]) is ComplianceStatus.NO_STATUS
    assert progress([]) == {"completed": 0, "total": 0, "percentage": 0}
