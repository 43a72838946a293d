"""Tests for the bounded EventLog."""

from orderbot.utils.event_log import EventLog, SimEvent


def _ev(version: int, category: str = "submit") -> SimEvent:
    return SimEvent(version=version, category=category, message=f"{category} v{version}")


class TestEventLog:

    def test_eviction(self):
        log = EventLog(maxlen=3)
        for v in range(1, 6):
            log.append_many([_ev(v)])
        assert len(log) == 3
        assert [e.version for e in log.latest()] == [3, 4, 5]

    def test_since_version_inclusive(self):
        log = EventLog()
        log.append_many([_ev(1), _ev(2), _ev(2, "assign"), _ev(3)])
        assert [e.category for e in log.since_version(2)] == ["submit", "assign", "submit"]
        assert log.since_version(4) == []

    def test_latest_count(self):
        log = EventLog()
        log.append_many([_ev(v) for v in range(1, 11)])
        assert [e.version for e in log.latest(2)] == [9, 10]

    def test_clear(self):
        log = EventLog()
        log.append_many([_ev(1)])
        log.clear()
        assert len(log) == 0
        assert log.latest() == []
