"""Key routing from the tkinter field to the picker controllers."""

import pytest

pytest.importorskip("tkinter")

from date_picker import DatePickerController
from picker_widgets import _KEY_NAMES
from time_picker import TimePickerController


@pytest.mark.parametrize("sequence,name", sorted(_KEY_NAMES.items()))
def test_date_controller_consumes_bound_keys(sequence, name, events):
    p = DatePickerController(value="2024-03-14", on_change=events.append)
    p.open()
    assert p.key(name) is True


def test_time_controller_closes_on_escape():
    assert "Escape" in _KEY_NAMES.values()
    t = TimePickerController()
    t.open()
    assert t.key("Escape") is True
    assert not t.is_open
