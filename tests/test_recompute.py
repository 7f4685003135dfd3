from recompute import LatestResultGate


def test_latest_ticket_wins():
    gate = LatestResultGate()
    first = gate.next_ticket()
    second = gate.next_ticket()

    assert second > first
    assert gate.offer(second, "fresh") is True
    # the slower, older recompute finishes afterwards and is ignored
    assert gate.offer(first, "stale") is False
    assert gate.result == "fresh"
    assert gate.accepted_ticket == second


def test_in_order_results_are_all_applied():
    gate = LatestResultGate()
    for value in ("a", "b", "c"):
        assert gate.offer(gate.next_ticket(), value)
    assert gate.result == "c"


def test_same_ticket_is_not_applied_twice():
    gate = LatestResultGate()
    t = gate.next_ticket()
    assert gate.offer(t, 1)
    assert not gate.offer(t, 2)
    assert gate.result == 1
