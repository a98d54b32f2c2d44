from concurrent.futures import Future

import pytest

from src.site_timesheet.site_timesheet.core.exceptions import StorageError, ValidationError
from src.site_timesheet.site_timesheet.shifts.form import ShiftEntryForm


class RecordingService:
    def __init__(self, fail: bool = False):
        self.calls = []
        self.fail = fail

    def record_manual(self, **kwargs):
        self.calls.append(("manual", kwargs))
        if self.fail:
            raise StorageError("offline")
        return "r1"

    def submit(self, **kwargs):
        self.calls.append(("live", kwargs))
        return "r1"


class InlineDispatcher:
    """Runs the write immediately, like WriteDispatcher but synchronous."""

    def submit(self, fn, *args, on_error=None, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
            if on_error is not None:
                on_error(exc)
        return future


def _form(service, errors=None):
    return ShiftEntryForm(
        service=service,
        dispatcher=InlineDispatcher(),
        foreman_name="Majster",
        on_error=(errors.append if errors is not None else None),
        work_date="2024-05-10",
    )


def test_steppers_use_fifteen_and_five_minute_steps():
    form = _form(RecordingService())
    assert form.step_start() == "07:15"
    assert form.step_end(-1) == "16:15"
    assert form.step_lunch(-1) == "00:25"
    for _ in range(10):
        form.step_lunch(-1)
    assert form.lunch_duration == "00:00"


def test_submit_manual_resets_worker_and_times_but_keeps_site():
    service = RecordingService()
    form = _form(service)
    form.site_id = "1"
    form.worker_id = "2"
    form.step_start(2)

    future = form.submit_manual()

    assert future.result() == "r1"
    kind, kwargs = service.calls[0]
    assert kind == "manual"
    assert kwargs["start_time"] == "07:30"
    assert kwargs["worker_id"] == "2"
    assert form.worker_id == ""
    assert form.start_time == "07:00"
    assert form.site_id == "1"
    assert form.work_date == "2024-05-10"


def test_submit_requires_site_and_worker():
    service = RecordingService()
    form = _form(service)
    form.site_id = "1"
    with pytest.raises(ValidationError):
        form.submit_live()
    assert service.calls == []


def test_failed_write_is_reported_and_form_still_reset():
    errors = []
    form = _form(RecordingService(fail=True), errors)
    form.site_id = "1"
    form.worker_id = "2"

    form.submit_manual()

    assert len(errors) == 1
    assert isinstance(errors[0], StorageError)
    assert form.worker_id == ""
