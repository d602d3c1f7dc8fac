from datetime import datetime, time

import pytest

from shivvaas.puja import puja_time_for


@pytest.mark.parametrize(
    "clock, label",
    [
        (time(4, 0), "Brahma Muhurta"),
        (time(5, 0), "Brahma Muhurta"),
        (time(6, 0), "General Time"),
        (time(10, 0), "General Time"),
        (time(18, 0), "Sandhya Kaal"),
        (time(19, 59), "Sandhya Kaal"),
        (time(20, 0), "General Time"),
        (time(23, 30), "Nishitha Kaal"),
        (time(0, 0), "Nishitha Kaal"),
        (time(1, 0), "Nishitha Kaal"),
        (time(2, 0), "General Time"),
    ],
)
def test_bands(clock, label):
    assert puja_time_for(clock).label == label


def test_datetime_uses_clock_time():
    puja = puja_time_for(datetime(2024, 6, 17, 19, 0))
    assert puja.label == "Sandhya Kaal"
    assert puja.significance == "Time for Pradosh worship"


def test_hindi():
    puja = puja_time_for(time(5, 0), "hi")
    assert puja.label == "ब्रह्म मुहूर्त"
    assert puja.significance == "सर्वोत्तम पूजा काल"
