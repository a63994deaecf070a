"""ServiceTracer tests."""

import threading

from complytrack.tracing import ServiceTracer


class TestServiceTracer:
    """Tests for the in-memory event buffer."""

    def test_log_and_filter(self):
        tracer = ServiceTracer()
        tracer.log("evidence_added", "checklist_service", "AC-1 <- pw.pdf", {"confidence": 0.8})
        tracer.log("fallback", "report_engine", "generic recommendations")

        assert len(tracer.get_events()) == 2
        [event] = tracer.get_events(component="report_engine")
        assert event["event_type"] == "fallback"
        assert event["data"] == {}
        assert tracer.get_events(event_type="evidence_added")[0]["data"] == {"confidence": 0.8}

    def test_buffer_is_bounded(self):
        tracer = ServiceTracer(max_events=3)
        for i in range(5):
            tracer.log("status_changed", "checklist_service", f"event {i}")

        messages = [e["message"] for e in tracer.get_events()]
        assert messages == ["event 2", "event 3", "event 4"]

    def test_clear(self):
        tracer = ServiceTracer()
        tracer.log("init", "runner", "started")
        tracer.clear()
        assert tracer.get_events() == []

    def test_concurrent_logging(self):
        tracer = ServiceTracer()

        def worker():
            for _ in range(50):
                tracer.log("status_changed", "checklist_service", "tick")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(tracer.get_events()) == 400
