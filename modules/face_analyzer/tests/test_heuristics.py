"""
Unit tests for face_analyzer.heuristics module.
"""
import numpy as np
import pytest

from modules.face_analyzer.heuristics import (
    analyze,
    analyze_from_filename,
    estimate_age,
    estimate_gender,
    skin_tone_mask,
)


class TestSkinToneMask:
    """Tests for skin_tone_mask()."""

    def test_skin_pixel_matches(self):
        rgb = np.array([[200.0, 150.0, 100.0]])
        assert skin_tone_mask(rgb).tolist() == [True]

    def test_dark_pixel_rejected(self):
        rgb = np.array([[10.0, 10.0, 10.0]])
        assert skin_tone_mask(rgb).tolist() == [False]

    def test_red_bound_is_exclusive(self):
        """R must be strictly below 255."""
        rgb = np.array([[255.0, 150.0, 100.0]])
        assert skin_tone_mask(rgb).tolist() == [False]

    def test_channel_order_required(self):
        """G must exceed B."""
        rgb = np.array([[200.0, 100.0, 150.0]])
        assert skin_tone_mask(rgb).tolist() == [False]


class TestAnalyze:
    """Tests for analyze() function."""

    def test_half_skin_frame_detects_face(self, half_skin_frame):
        result = analyze(half_skin_frame, width=10, height=10)

        assert result.face_detected is True
        # brightness 80 (+10), saturation 0.25 (+5)
        assert result.age == 45
        assert result.gender == "male"
        assert result.confidence == 0.75

    def test_bright_saturated_frame_reads_female(self, bright_saturated_frame):
        result = analyze(bright_saturated_frame)

        assert result.face_detected is True
        # brightness 160, saturation 0.75 (-5)
        assert result.age == 25
        assert result.gender == "female"

    def test_flat_bytes_match_array(self, half_skin_frame):
        from_array = analyze(half_skin_frame)
        from_bytes = analyze(half_skin_frame.tobytes(), width=10, height=10)
        assert from_array == from_bytes

    def test_idempotent(self, half_skin_frame):
        assert analyze(half_skin_frame) == analyze(half_skin_frame)

    @pytest.mark.parametrize("skin_count", [15, 85])
    def test_ratio_bounds_are_exclusive(self, skin_count, frame_factory):
        """Exactly 15% or 85% skin is not a face."""
        result = analyze(frame_factory(skin_count))
        assert result.face_detected is False
        assert result.confidence == 0.0

    def test_full_skin_frame_is_not_a_face(self, frame_factory):
        result = analyze(frame_factory(100))
        assert result.face_detected is False

    def test_no_face_returns_neutral_default(self, frame_factory):
        result = analyze(frame_factory(0))
        assert result.age == 30
        assert result.gender == "unknown"
        assert result.confidence == 0.0
        assert result.face_detected is False

    def test_empty_buffer(self):
        result = analyze(b"", width=0, height=0)
        assert result.age == 30
        assert result.face_detected is False

    def test_buffer_not_multiple_of_four(self):
        result = analyze(b"\x01" * 7)
        assert result.face_detected is False
        assert result.confidence == 0.0

    def test_size_mismatch(self, half_skin_frame):
        """Declared dimensions disagreeing with the buffer length yield the default."""
        result = analyze(half_skin_frame.tobytes(), width=20, height=20)
        assert result.face_detected is False

    def test_all_black_frame_does_not_divide_by_zero(self):
        frame = np.zeros((4, 4, 4), dtype=np.uint8)
        result = analyze(frame)
        assert result.face_detected is False

    @pytest.mark.parametrize("seed", range(5))
    def test_outputs_stay_in_bounds(self, seed):
        rng = np.random.default_rng(seed)
        frame = rng.integers(0, 256, size=(16, 16, 4), dtype=np.uint8)
        result = analyze(frame)
        assert 18 <= result.age <= 65
        assert 0.0 <= result.confidence <= 0.75


class TestEstimateAge:
    """Tests for the age rule."""

    def test_baseline(self):
        assert estimate_age(150, 0.45) == 30

    def test_dark_and_flat_reads_older(self):
        assert estimate_age(50, 0.1) == 45

    def test_bright_and_saturated_reads_younger(self):
        assert estimate_age(200, 0.9) == 20


class TestEstimateGender:
    """Tests for the gender rule."""

    def test_female(self):
        assert estimate_gender(0.6, 160) == "female"

    def test_male(self):
        assert estimate_gender(0.2, 200) == "male"

    def test_unknown(self):
        assert estimate_gender(0.45, 100) == "unknown"


class TestAnalyzeFromFilename:
    """Tests for analyze_from_filename() function."""

    def test_age_and_male_keyword(self):
        result = analyze_from_filename("old_man_70yr.jpg")
        assert result.age == 70
        assert result.gender == "male"
        assert result.confidence == 0.3
        assert result.face_detected is False

    def test_female_checked_before_male(self):
        """'female' contains 'male'."""
        result = analyze_from_filename("Female_Portrait_30yo.PNG")
        assert result.gender == "female"
        assert result.age == 30

    def test_woman_keyword(self):
        assert analyze_from_filename("woman.jpg").gender == "female"

    def test_defaults(self):
        result = analyze_from_filename("IMG_0042.jpg")
        assert result.age == 25
        assert result.gender == "unknown"

    def test_empty_filename(self):
        result = analyze_from_filename("")
        assert result.age == 25
        assert result.gender == "unknown"
