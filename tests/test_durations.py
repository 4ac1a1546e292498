from __future__ import annotations

import pytest

from midi2ass.errors import MissingHeaderError
from midi2ass.midi.model import MidiHeader, MidiTiming, NoteEvent, TempoSetting
from midi2ass.timing.durations import Duration, DurationCalculator, compute_durations


def _timing(pairs, ticks=480, tempo=500_000, header=True):
    events = []
    for on, off in pairs:
        events.append(NoteEvent(on=True, tick=on))
        events.append(NoteEvent(on=False, tick=off))
    return MidiTiming(
        header=MidiHeader(ticks) if header else None,
        tempo=TempoSetting(tempo),
        events=tuple(events),
    )


def test_back_to_back_eighths_at_120_bpm():
    res = compute_durations(_timing([(0, 240), (240, 480)]))
    assert res.durations == (Duration(25), Duration(25))
    assert res.remainder == 0.0
    assert res.total_cs == pytest.approx(50, abs=1)


def test_threshold_is_one_and_a_half_32nd_notes():
    calc = DurationCalculator(ticks_per_quarter=480, tempo=500_000)
    # quarter = 50 cs, 32nd = 6.25 cs
    assert calc.gap_threshold == pytest.approx(9.375)
    assert calc.cs_per_tick == pytest.approx(500_000 / 4_800_000)


def test_single_note():
    res = compute_durations(_timing([(0, 100)], ticks=96))
    # 100 * 500000 / 960000 = 52.0833...
    assert res.durations == (Duration(52),)
    assert res.remainder == pytest.approx(1 / 12)


def test_short_gap_extends_previous_note():
    # 30 ticks = 3.125 cs, under the threshold
    res = compute_durations(_timing([(0, 240), (270, 480)]))
    assert res.durations == (Duration(28), Duration(22))
    assert all(not d.rest for d in res.durations)
    assert res.total_cs == 50


def test_gap_at_threshold_is_absorbed():
    # 90 ticks = 9.375 cs exactly
    res = compute_durations(_timing([(0, 240), (330, 480)]))
    assert len(res.durations) == 2
    assert res.durations[0].cs == 34


def test_gap_over_threshold_is_a_rest():
    # 91 ticks = 9.479 cs
    res = compute_durations(_timing([(0, 240), (331, 480)]))
    assert [d.rest for d in res.durations] == [False, True, False]
    assert res.durations[0] == Duration(25)
    assert res.durations[1] == Duration(9, rest=True)


def test_long_rest_between_notes():
    res = compute_durations(_timing([(0, 240), (480, 720)]))
    assert res.durations == (Duration(25), Duration(25, rest=True), Duration(25))
    assert res.notes == (25, 25)


def test_lead_in_rest_before_first_note():
    res = compute_durations(_timing([(960, 1200)]))
    assert res.durations == (Duration(100, rest=True), Duration(25))


def test_short_lead_in_rides_on_first_note():
    res = compute_durations(_timing([(30, 270)]))
    assert res.durations == (Duration(28),)
    assert res.remainder == pytest.approx(0.125)


def test_remainder_is_carried():
    res = compute_durations(_timing([(0, 100), (100, 250), (400, 500)], ticks=96))
    assert res.durations == (Duration(52), Duration(78), Duration(78, rest=True), Duration(52))
    assert res.remainder == pytest.approx(5 / 12)


@pytest.mark.parametrize(
    "pairs, ticks, tempo",
    [
        ([(0, 100), (100, 250), (400, 500)], 96, 500_000),
        ([(0, 7), (9, 31), (31, 44), (300, 301), (305, 999)], 96, 428_571),
        ([(13, 127), (140, 333), (333, 334), (2000, 2400)], 480, 652_173),
        ([(0, 1)], 1, 1_000_001),
    ],
)
def test_total_time_is_conserved(pairs, ticks, tempo):
    res = compute_durations(_timing(pairs, ticks=ticks, tempo=tempo))
    true_total = pairs[-1][1] * tempo / (10_000 * ticks)
    assert res.total_cs + res.remainder == pytest.approx(true_total)
    assert all(d.cs >= 0 for d in res.durations)


def test_whole_centisecond_ticks_carry_nothing():
    # 0.1 cs per tick, every delta a multiple of 10 ticks
    pairs = [(0, 250), (250, 600), (1000, 1100)]
    calc = DurationCalculator(ticks_per_quarter=500, tempo=500_000)
    for on, off in pairs:
        calc.note_on(on)
        assert calc.remainder == 0.0
        calc.note_off(off)
        assert calc.remainder == 0.0
    res = calc.finish()
    assert res.notes == tuple((off - on) // 10 for on, off in pairs)
    assert res.durations[2] == Duration(40, rest=True)


def test_note_slots_match_pairs():
    pairs = [(0, 100), (101, 200), (600, 700), (702, 800), (1500, 1600)]
    res = compute_durations(_timing(pairs))
    assert len(res.notes) == len(pairs)


def test_missing_header_is_rejected():
    with pytest.raises(MissingHeaderError):
        compute_durations(_timing([(0, 240)], header=False))


def test_no_notes():
    res = compute_durations(_timing([]))
    assert res.durations == ()
    assert res.remainder == 0.0
