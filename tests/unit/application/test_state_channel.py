"""
Unit tests for the state channel.
"""

from upload_dashboard.application.state_channel import StateChannel
from upload_dashboard.domain.models.upload_state import EventKind, StateEvent, UploadState


def make_event(kind=EventKind.RESET):
    return StateEvent(kind=kind, state=UploadState())


class TestStateChannel:

    def test_subscribers_called_in_order(self):
        channel = StateChannel()
        calls = []
        channel.subscribe(lambda e: calls.append("first"))
        channel.subscribe(lambda e: calls.append("second"))

        channel.emit(make_event())

        assert calls == ["first", "second"]

    def test_unsubscribe(self):
        channel = StateChannel()
        calls = []
        unsubscribe = channel.subscribe(calls.append)

        unsubscribe()
        unsubscribe()
        channel.emit(make_event())

        assert calls == []
        assert len(channel) == 0

    def test_failing_subscriber_isolated(self):
        channel = StateChannel()
        calls = []

        def broken(event):
            raise RuntimeError("render failed")

        channel.subscribe(broken)
        channel.subscribe(calls.append)

        channel.emit(make_event(EventKind.PROGRESS))

        assert [e.kind for e in calls] == [EventKind.PROGRESS]
