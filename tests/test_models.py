"""Tests for the session/segment model and the built-in catalog."""

import dataclasses

import pytest

from treadpro.workout import (
    Segment, Session,
    MIN_SEGMENTS, MAX_SPEED, MAX_INCLINE,
    clamp_speed, clamp_incline, clamp_duration,
    DEFAULT_SESSIONS, get_session, new_custom_session,
)


# ═══════════════════════════════════════════════════════════════════════════
#  SEGMENT
# ═══════════════════════════════════════════════════════════════════════════


class TestSegment:

    def test_defaults(self):
        seg = Segment(duration=60)
        assert seg.speed == 0.0
        assert seg.incline == 0
        assert seg.id.startswith("s-")

    def test_ids_are_unique(self):
        assert Segment(duration=1).id != Segment(duration=1).id

    @pytest.mark.parametrize("duration", [0, -5])
    def test_non_positive_duration_rejected(self, duration):
        with pytest.raises(ValueError):
            Segment(duration=duration)

    @pytest.mark.parametrize("duration", [1.5, "60", True])
    def test_non_integer_duration_rejected(self, duration):
        with pytest.raises(TypeError):
            Segment(duration=duration)

    def test_negative_targets_rejected(self):
        with pytest.raises(ValueError):
            Segment(duration=10, speed=-1.0)
        with pytest.raises(ValueError):
            Segment(duration=10, incline=-2)

    def test_frozen(self):
        seg = Segment(duration=10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            seg.duration = 20

    def test_distance(self):
        assert Segment(duration=1800, speed=10.0).distance_km == pytest.approx(5.0)


# ═══════════════════════════════════════════════════════════════════════════
#  SESSION
# ═══════════════════════════════════════════════════════════════════════════


class TestSession:

    def test_segments_stored_as_tuple(self):
        s = Session(name="x", segments=[Segment(duration=5)])
        assert isinstance(s.segments, tuple)

    def test_empty_session_rejected(self):
        with pytest.raises(ValueError):
            Session(name="x", segments=())

    def test_total_duration(self, two_segment_session):
        assert two_segment_session.total_duration == 5

    def test_builtin_can_start_with_one_segment(self):
        assert Session(name="x", segments=(Segment(duration=5),)).can_start

    def test_custom_needs_min_segments(self):
        segs = tuple(Segment(duration=5) for _ in range(MIN_SEGMENTS - 1))
        short = Session(name="x", segments=segs, is_custom=True)
        assert short.can_start is False
        assert short.add_segment().can_start is True


class TestAuthoring:

    def test_with_segment_returns_new_session(self):
        s = new_custom_session()
        edited = s.with_segment(0, speed=8.0, incline=4, duration=90)
        assert edited is not s
        assert edited.segments[0].speed == 8.0
        assert edited.segments[0].incline == 4
        assert edited.segments[0].duration == 90
        # template untouched
        assert s.segments[0].speed == 5.0
        assert edited.id == s.id

    def test_with_segment_clamps(self):
        s = new_custom_session()
        edited = s.with_segment(1, speed=99.0, incline=40, duration=0)
        seg = edited.segments[1]
        assert seg.speed == MAX_SPEED
        assert seg.incline == MAX_INCLINE
        assert seg.duration == 1

    def test_add_segment_copies_last_targets(self):
        s = new_custom_session().with_segment(MIN_SEGMENTS - 1, speed=7.5, incline=3)
        grown = s.add_segment()
        assert len(grown.segments) == MIN_SEGMENTS + 1
        assert grown.segments[-1].speed == 7.5
        assert grown.segments[-1].incline == 3
        assert grown.segments[-1].id != grown.segments[-2].id

    def test_remove_segment_respects_minimum(self):
        s = new_custom_session()
        assert s.remove_segment(0) is s
        grown = s.add_segment()
        assert len(grown.remove_segment(0).segments) == MIN_SEGMENTS

    def test_builtin_keeps_at_least_one(self):
        s = Session(name="x", segments=(Segment(duration=5), Segment(duration=6)))
        one = s.remove_segment(0)
        assert [seg.duration for seg in one.segments] == [6]
        assert one.remove_segment(0) is one


class TestClamps:

    @pytest.mark.parametrize("raw,expected", [
        (-3, 0.0), (0, 0.0), (6.25, 6.2), (MAX_SPEED + 5, MAX_SPEED),
    ])
    def test_clamp_speed(self, raw, expected):
        assert clamp_speed(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw,expected", [
        (-1, 0), (7, 7), (MAX_INCLINE + 1, MAX_INCLINE),
    ])
    def test_clamp_incline(self, raw, expected):
        assert clamp_incline(raw) == expected

    def test_clamp_duration_minimum(self):
        assert clamp_duration(0) == 1
        assert clamp_duration(125) == 125


# ═══════════════════════════════════════════════════════════════════════════
#  CATALOG
# ═══════════════════════════════════════════════════════════════════════════


class TestCatalog:

    def test_builtins_are_startable(self):
        assert DEFAULT_SESSIONS
        for session in DEFAULT_SESSIONS:
            assert session.can_start
            assert session.is_custom is False

    def test_builtins_within_limits(self):
        for session in DEFAULT_SESSIONS:
            for seg in session.segments:
                assert 0 <= seg.speed <= MAX_SPEED
                assert 0 <= seg.incline <= MAX_INCLINE

    def test_get_session(self):
        first = DEFAULT_SESSIONS[0]
        assert get_session(first.id) is first
        assert get_session("nope") is None

    def test_new_custom_session(self):
        s = new_custom_session()
        assert s.is_custom
        assert len(s.segments) == MIN_SEGMENTS
        assert s.can_start
        assert all(seg.duration == 180 for seg in s.segments)
        assert new_custom_session().id != s.id
