from baseline_guard.violation import ContextTag, ViolationKind, ViolationLedger, ViolationRecord


def record(file="a.js", line=1, feature_id="at", context=ContextTag.USAGE, kind=ViolationKind.JS):
    return ViolationRecord(file, line, feature_id, kind, context)


def test_ledger_deduplicates_by_site():
    ledger = ViolationLedger()
    assert ledger.add(record(context=ContextTag.FUNCTION_CALL))
    assert not ledger.add(record(context=ContextTag.PROPERTY_ACCESS))
    assert ledger.add(record(line=2))
    assert ledger.add(record(feature_id="fetch"))
    assert ledger.add(record(file="b.js"))
    assert len(ledger) == 4
    assert ledger.records[0].context is ContextTag.FUNCTION_CALL


def test_ledger_keeps_insertion_order():
    ledger = ViolationLedger()
    ledger.extend([record(line=3), record(line=1), record(line=3), record(line=2)])
    assert [r.line for r in ledger] == [3, 1, 2]


def test_records_is_a_copy():
    ledger = ViolationLedger()
    ledger.add(record())
    ledger.records.clear()
    assert len(ledger) == 1
