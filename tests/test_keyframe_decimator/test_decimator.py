# SPDX-License-Identifier: MIT
"""Tests for single-track decimation."""

import numpy as np
import pytest

from keyframe_decimator.animation.animation_data import KeyframeTrack, TrackKind


def make_track(times, values, kind=TrackKind.NUMBER, stride=None):
    return KeyframeTrack(
        target_path="object.value",
        kind=kind,
        times=times,
        values=values,
        value_stride=stride,
    )


class TestDecimateScenarios:
    """Tests for the reference decimation scenarios."""

    def test_linear_motion_collapses_to_endpoints(self):
        """Test exactly linear motion keeps only the first and last keyframe."""
        from keyframe_decimator.animation.decimator import decimate_track

        track = make_track([0, 1, 2, 3, 4], [0, 10, 20, 30, 40])
        result = decimate_track(track, 0.01)

        assert result.times.tolist() == [0.0, 4.0]
        assert result.values.tolist() == [0.0, 40.0]

    def test_single_outlier_is_kept(self):
        """Test a spike that breaks the linear prediction survives."""
        from keyframe_decimator.animation.decimator import decimate_track

        track = make_track([0, 1, 2, 3, 4], [0, 10, 25, 30, 40])
        result = decimate_track(track, 1.0)

        assert 2.0 in result.times.tolist()
        assert result.get_value_at(result.times.tolist().index(2.0)) == (25.0,)
        assert result.times[0] == 0.0
        assert result.times[-1] == 4.0

    def test_outlier_neighbours_dropped_with_loose_tolerance(self):
        """Test neighbours within tolerance of their predictions are dropped."""
        from keyframe_decimator.animation.decimator import decimate_track

        # t=1 predicted 12.5, t=2 predicted 20 from (0,0)-(3,30), t=3 predicted 32.5
        track = make_track([0, 1, 2, 3, 4], [0, 10, 25, 30, 40])
        result = decimate_track(track, 3.0)

        assert result.times.tolist() == [0.0, 2.0, 4.0]
        assert result.values.tolist() == [0.0, 25.0, 40.0]

    def test_one_component_over_tolerance_keeps_whole_sample(self):
        """Test a vector sample is kept when only one component deviates."""
        from keyframe_decimator.animation.decimator import decimate_track

        track = make_track(
            [0, 1, 2],
            [
                0, 0, 0,
                1, 1, 5,
                2, 2, 2,
            ],
            kind=TrackKind.VECTOR,
        )
        result = decimate_track(track, 0.5)

        assert len(result) == 3
        assert result.get_value_at(1) == (1.0, 1.0, 5.0)

    def test_per_component_max_not_euclidean(self):
        """Test each component is checked on its own, not as a vector norm."""
        from keyframe_decimator.animation.decimator import decimate_track

        # Each component is off by 0.4, Euclidean error would be ~0.69
        track = make_track(
            [0, 1, 2],
            [0, 0, 0, 1.4, 1.4, 1.4, 2, 2, 2],
            kind=TrackKind.VECTOR,
        )
        result = decimate_track(track, 0.5)

        assert len(result) == 2

    def test_quaternions_interpolated_per_component(self):
        """Test rotation tracks use the same per-component linear test."""
        from keyframe_decimator.animation.decimator import decimate_track

        track = make_track(
            [0, 1, 2],
            [0, 0, 0, 1, 0, 0, 0.5, 0.75, 0, 0, 1, 0.5],
            kind=TrackKind.QUATERNION,
        )
        result = decimate_track(track, 0.01)

        assert result.kind is TrackKind.QUATERNION
        assert result.value_stride == 4
        assert len(result) == 2


class TestDecimateInvariants:
    """Tests for invariants of decimate_track."""

    @pytest.fixture
    def wave(self):
        times = np.linspace(0.0, 2.0, 61)
        values = np.stack(
            [np.sin(2 * np.pi * times), np.cos(np.pi * times), 0.5 * times], axis=-1
        )
        return make_track(times, values.ravel(), kind=TrackKind.VECTOR)

    def test_zero_tolerance_is_exact_copy(self, wave):
        """Test zero tolerance returns identical, unaliased data."""
        from keyframe_decimator.animation.decimator import decimate_track

        result = decimate_track(wave, 0)

        assert result.value_equal(wave)
        assert result is not wave
        assert not np.shares_memory(result.values, wave.values)

    def test_negative_tolerance_clamped(self, wave):
        """Test negative tolerance behaves like zero."""
        from keyframe_decimator.animation.decimator import decimate_track

        assert decimate_track(wave, -1.0).value_equal(wave)

    @pytest.mark.parametrize("tolerance", [float("nan"), float("inf")])
    def test_non_finite_tolerance_rejected(self, wave, tolerance):
        """Test NaN and infinite tolerances are rejected."""
        from keyframe_decimator.animation.decimator import decimate_track

        with pytest.raises(ValueError, match="finite"):
            decimate_track(wave, tolerance)

    @pytest.mark.parametrize("tolerance", [0.001, 0.01, 0.1, 1.0])
    def test_endpoints_and_order_preserved(self, wave, tolerance):
        """Test endpoints survive and output stays ordered and consistent."""
        from keyframe_decimator.animation.decimator import decimate_track

        result = decimate_track(wave, tolerance)

        assert result.get_value_at(0) == wave.get_value_at(0)
        assert result.get_value_at(len(result) - 1) == wave.get_value_at(len(wave) - 1)
        assert result.times[0] == wave.times[0]
        assert result.times[-1] == wave.times[-1]
        assert np.all(np.diff(result.times) > 0)
        assert len(result.values) == len(result.times) * result.value_stride
        assert len(result) <= len(wave)

    def test_input_untouched(self, wave):
        """Test the input track is not modified."""
        from keyframe_decimator.animation.decimator import decimate_track

        before = wave.copy()
        decimate_track(wave, 0.1)

        assert wave.value_equal(before)

    def test_repeat_calls_are_identical(self, wave):
        """Test re-running with the same tolerance gives bit-identical output."""
        from keyframe_decimator.animation.decimator import decimate_track

        assert decimate_track(wave, 0.05).value_equal(decimate_track(wave, 0.05))

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_short_tracks_copied(self, count):
        """Test tracks with two or fewer keyframes are returned whole."""
        from keyframe_decimator.animation.decimator import decimate_track

        track = make_track(list(range(count)), [7.0] * count)
        result = decimate_track(track, 100.0)

        assert result.value_equal(track)

    def test_fixed_point_is_stable(self):
        """Test decimating an already minimal track changes nothing."""
        from keyframe_decimator.animation.decimator import decimate_track

        track = make_track([0, 1, 2, 3, 4], [0, 10, 0, 10, 0])
        once = decimate_track(track, 1.0)
        twice = decimate_track(once, 1.0)

        assert len(once) == 5
        assert twice.value_equal(once)

    def test_dropped_samples_within_tolerance(self):
        """Test dropped keyframes are rebuilt within tolerance between corners."""
        from keyframe_decimator.animation.decimator import decimate_track
        from keyframe_decimator.animation.sampling import reconstruction_error

        times = np.arange(13, dtype=float)
        values = np.interp(times, [0, 4, 8, 12], [0, 4, -2, 1])
        track = make_track(times, values)
        tolerance = 0.1
        result = decimate_track(track, tolerance)

        assert result.times.tolist() == [0.0, 4.0, 8.0, 12.0]
        assert reconstruction_error(track, result) <= tolerance + 1e-12

    def test_larger_tolerance_never_keeps_more(self):
        """Test sample count does not grow with tolerance on a smooth curve.

        The greedy pass is not monotonic in tolerance for arbitrary data, so
        this uses a uniformly sampled parabola where each drop decision only
        depends on the distance from the anchor.
        """
        from keyframe_decimator.animation.decimator import decimate_track

        times = np.linspace(0.0, 1.0, 41)
        track = make_track(times, times**2)
        counts = [len(decimate_track(track, t)) for t in (0.0, 0.001, 0.01, 0.1, 1.0)]

        assert counts == sorted(counts, reverse=True)
        assert counts[-1] == 2


class TestDegenerateIntervals:
    """Tests for equal consecutive timestamps."""

    def test_zero_span_keeps_candidate(self):
        """Test a zero-length interpolation span keeps the candidate."""
        from keyframe_decimator.animation.decimator import decimate_track

        # Keyframes 1, 2 and 3 share t=1, so anchor 1 and successor 3 coincide
        track = make_track([0.0, 1.0, 1.0, 1.0, 2.0], [0.0, 5.0, 0.0, 5.0, 6.0])
        with np.errstate(divide="raise", invalid="raise"):
            result = decimate_track(track, 0.5)

        assert result.times.tolist() == [0.0, 1.0, 1.0, 1.0, 2.0]
        assert result.values.tolist() == [0.0, 5.0, 0.0, 5.0, 6.0]

    def test_removable_mask(self):
        """Test the keep mask matches the decimated output."""
        from keyframe_decimator.animation.decimator import removable_mask

        times = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
        samples = np.array([[0.0], [10.0], [25.0], [30.0], [40.0]])

        keep = removable_mask(times, samples, 3.0)

        assert keep.tolist() == [True, False, True, False, True]
