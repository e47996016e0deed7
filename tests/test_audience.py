"""
Unit tests for the Audience Admission Gate.
"""

import threading

import pytest

from games.player_auction.audience import STATUS_AVAILABLE, STATUS_FULL, AudienceGate
from games.player_auction.errors import CapacityError, CapacityExceeded


class TestJoinLeave:
    """Join and leave against the cap"""

    def test_join_until_full(self, gate):
        """Every join up to the cap succeeds, the next one does not"""
        assert [gate.join() for _ in range(3)] == [True, True, True]

        assert gate.join() is False
        limit = gate.check_capacity()
        assert limit.status == STATUS_FULL
        assert limit.current_count == 3
        assert limit.max_capacity == 3

    def test_leave_frees_a_seat(self, gate):
        for _ in range(3):
            gate.join()
        assert gate.leave() is True
        assert gate.current_count == 2
        assert gate.join() is True

    def test_leave_on_empty_is_absorbed(self, gate):
        assert gate.leave() is False
        assert gate.current_count == 0

    def test_zero_capacity(self):
        gate = AudienceGate(max_capacity=0)
        assert gate.join() is False
        assert gate.check_capacity().status == STATUS_FULL

    def test_negative_capacity_rejected(self):
        with pytest.raises(ValueError):
            AudienceGate(max_capacity=-1)

    def test_same_client_counted_twice(self, gate):
        """No identity tracking"""
        gate.join()
        gate.join()
        assert gate.current_count == 2


class TestCheckCapacity:
    """Capacity reporting"""

    def test_available(self, gate):
        gate.join()
        limit = gate.check_capacity()
        assert limit.status == STATUS_AVAILABLE
        assert limit.current_count == 1
        assert "2" in limit.message
        assert limit.to_dict() == {
            "status": STATUS_AVAILABLE,
            "maxCapacity": 3,
            "currentCount": 1,
            "message": limit.message,
        }


class TestAdmission:
    """Context-managed seats"""

    def test_admission_releases_seat(self, gate):
        with gate.admission():
            assert gate.current_count == 1
        assert gate.current_count == 0

    def test_admission_releases_seat_on_error(self, gate):
        with pytest.raises(RuntimeError):
            with gate.admission():
                raise RuntimeError("client went away")
        assert gate.current_count == 0

    def test_admission_when_full(self, gate):
        for _ in range(3):
            gate.join()
        with pytest.raises(CapacityExceeded) as exc_info:
            with gate.admission():
                pass
        assert isinstance(exc_info.value, CapacityError)
        assert gate.current_count == 3


class TestConcurrentJoins:

    def test_never_exceeds_capacity(self):
        gate = AudienceGate(max_capacity=50)
        results = []
        results_lock = threading.Lock()

        def worker():
            for _ in range(20):
                ok = gate.join()
                with results_lock:
                    results.append(ok)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(True) == 50
        assert gate.current_count == 50
