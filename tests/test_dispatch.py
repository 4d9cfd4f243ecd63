"""Tests for dispatch: frame -> effect routing."""

from __future__ import annotations

from logstream_monitor.core.dispatch import dispatch
from logstream_monitor.core.protocol import decode_frame
from logstream_monitor.types import (
    AppendLog,
    AppendNote,
    ApplyStatus,
    Ignore,
    RecordCreationTime,
    RecordStopTime,
    SessionStatus,
    ShowFatalError,
)


class TestTimestamps:
    def test_creation_time_int(self):
        assert dispatch({"type": "session_creation_time", "data": 1700000000}) == RecordCreationTime(1700000000)

    def test_creation_time_string(self):
        # The backend sends event data as strings
        assert dispatch({"type": "session_creation_time", "data": "1700000000"}) == RecordCreationTime(1700000000)

    def test_stop_time(self):
        assert dispatch({"type": "session_stop_time", "data": "1700000100"}) == RecordStopTime(1700000100)

    def test_float_truncated(self):
        assert dispatch({"type": "session_stop_time", "data": 17.9}) == RecordStopTime(17)

    def test_unparseable_ignored(self):
        assert isinstance(dispatch({"type": "session_creation_time", "data": "soon"}), Ignore)
        assert isinstance(dispatch({"type": "session_stop_time"}), Ignore)
        assert isinstance(dispatch({"type": "session_stop_time", "data": True}), Ignore)

    def test_non_finite_ignored(self):
        for value in ("inf", "-inf", "nan", float("inf"), float("nan"), 1e999):
            assert isinstance(dispatch({"type": "session_creation_time", "data": value}), Ignore)
            assert isinstance(dispatch({"type": "session_stop_time", "data": value}), Ignore)

    def test_non_finite_from_json_frame(self):
        payload = decode_frame('{"type": "session_stop_time", "data": NaN}')
        assert isinstance(dispatch(payload), Ignore)


class TestStatus:
    def test_running(self):
        assert dispatch({"type": "status", "data": "Running"}) == ApplyStatus(SessionStatus.RUNNING)

    def test_stopped_closes(self):
        effect = dispatch({"type": "status", "data": "Stopped"})
        assert effect == ApplyStatus(SessionStatus.STOPPED, close_connection=True)

    def test_unknown_values_show_stopped_but_keep_connection(self):
        for value in ("running", "Paused", "", None, 1):
            effect = dispatch({"type": "status", "data": value})
            assert effect.status is SessionStatus.STOPPED
            assert effect.close_connection is False


class TestFatalError:
    def test_invalid_session(self):
        assert dispatch({"message": "invalid session id"}) == ShowFatalError("invalid session id")

    def test_other_messages_ignored(self):
        assert isinstance(dispatch({"message": "session finished"}), Ignore)

    def test_typed_frame_with_message_is_not_fatal(self):
        effect = dispatch({"type": "log", "data": "x", "message": "invalid session id"})
        assert effect == AppendLog("x")


class TestTranscript:
    def test_log(self):
        assert dispatch({"type": "log", "data": "$ make build"}) == AppendLog("$ make build")

    def test_note(self):
        assert dispatch({"type": "note", "data": "deploy started"}) == AppendNote("deploy started")

    def test_missing_data_renders_empty(self):
        assert dispatch({"type": "log"}) == AppendLog("")
        assert dispatch({"type": "note", "data": None}) == AppendNote("")


def test_unknown_type_ignored():
    effect = dispatch({"type": "progress", "data": "50%"})
    assert isinstance(effect, Ignore)
    assert "progress" in effect.reason


def test_empty_payload_ignored():
    assert isinstance(dispatch({}), Ignore)
