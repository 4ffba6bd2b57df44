"""
Tests for the TrailMask lifecycle, updates and comparisons.
"""

import logging
import threading
import warnings

import numpy as np
import pytest

from trailmask import (
    InvalidInput,
    MaskConfig,
    NoOpWarning,
    Trail,
    TrailMask,
    TrailSet,
    create_mask,
    generate,
)

DIAGONAL = [[0.1, 0.1], [0.5, 0.5], [0.9, 0.9]]
ANTI_DIAGONAL = [[0.1, 0.9], [0.5, 0.5], [0.9, 0.1]]


class TestCreateMask:
    """Tests for mask construction."""

    def test_builds_raster_eagerly(self):
        mask = create_mask([DIAGONAL], 64, 32, thickness=4, blur_radius=2)
        raster = mask.raster()
        assert raster.shape == (32, 64)
        assert raster.dtype == np.uint8
        assert raster.max() == 255

    def test_defaults(self):
        mask = create_mask([DIAGONAL], 128, 128)
        assert mask.thickness == 64.0
        assert mask.blur_radius == 32.0
        assert mask.config == MaskConfig(width=128, height=128)

    def test_accessors(self):
        mask = TrailMask(Trail(DIAGONAL), width=40, height=30, thickness=3, blur_radius=1)
        assert mask.width == 40
        assert mask.height == 30
        assert len(mask.trails) == 1
        assert mask.trails[0] == Trail(DIAGONAL)

    def test_empty_trail_set(self):
        mask = create_mask([], 32, 32)
        assert not mask.raster().any()
        assert mask.compare([DIAGONAL]) == 0.0

    def test_invalid_size_raises(self):
        with pytest.raises(InvalidInput):
            create_mask([DIAGONAL], 0, 32)

    def test_negative_thickness_raises(self):
        with pytest.raises(InvalidInput):
            create_mask([DIAGONAL], 32, 32, thickness=-1)

    def test_malformed_trails_raise(self):
        with pytest.raises(InvalidInput):
            create_mask([[[0.1, 0.1], [0.2]]], 32, 32)

    def test_raster_matches_generate(self):
        mask = create_mask([DIAGONAL, ANTI_DIAGONAL], 48, 48, thickness=5, blur_radius=3)
        expected = generate(
            TrailSet.from_trails([DIAGONAL, ANTI_DIAGONAL]),
            MaskConfig(width=48, height=48, thickness=5, blur_radius=3),
        )
        np.testing.assert_array_equal(mask.raster(), expected)

    def test_raster_is_read_only(self):
        mask = create_mask([DIAGONAL], 16, 16, thickness=2, blur_radius=1)
        with pytest.raises(ValueError):
            mask.raster()[0, 0] = 0

    def test_raster_cannot_be_made_writeable(self):
        mask = create_mask([DIAGONAL], 16, 16, thickness=2, blur_radius=1)
        with pytest.raises(ValueError):
            mask.raster().flags.writeable = True
        assert mask.raster().any()

    def test_huge_coordinate_strokes_towards_it(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            mask = create_mask(
                Trail([[0.5, 0.5], [1e18, 0.5]]), 64, 64, thickness=4, blur_radius=0
            )
        raster = mask.raster()
        assert raster[32, 60] == 255
        assert raster[32, 63] == 255
        assert raster[32, 20] == 0


class TestCompare:
    """Tests for scoring queries against a mask."""

    def test_centerline_match(self):
        mask = create_mask([DIAGONAL], 512, 512, thickness=64, blur_radius=32)
        assert mask.compare([DIAGONAL]) >= 0.95

    def test_nearby_trail_scores_high(self):
        mask = create_mask([DIAGONAL], 256, 256, thickness=32, blur_radius=16)
        shifted = [[x + 0.02, y] for x, y in DIAGONAL]
        assert mask.compare([shifted]) > 0.9

    def test_distant_trail_scores_low(self):
        mask = create_mask([DIAGONAL], 256, 256, thickness=16, blur_radius=4)
        far = [[0.9, 0.1], [0.8, 0.05]]
        assert mask.compare([far]) < 0.05

    def test_out_of_bounds_scores_zero(self):
        mask = create_mask([DIAGONAL], 64, 64)
        assert mask.compare([[[-1.0, -1.0], [-1.0, -1.0]]]) == 0.0

    def test_bounds(self):
        rng = np.random.RandomState(11)
        mask = create_mask([DIAGONAL, ANTI_DIAGONAL], 96, 96, thickness=12, blur_radius=6)
        for _ in range(10):
            s = mask.compare([rng.rand(20, 2) * 1.5 - 0.25])
            assert 0.0 <= s <= 1.0

    def test_monotonic_in_thickness(self):
        query = [[[0.5, 0.62]]]
        mask = create_mask([DIAGONAL], 256, 256, thickness=0, blur_radius=8)
        scores = []
        for thickness in (0, 4, 16, 32, 64, 96):
            mask.update(thickness=thickness)
            scores.append(mask.compare(query))
        assert scores == sorted(scores)
        assert scores[-1] > scores[0]

    def test_score_rises_towards_centerline(self):
        mask = create_mask([DIAGONAL], 256, 256, thickness=16, blur_radius=16)
        scores = [mask.compare([[[0.5, 0.5 + off]]]) for off in (0.3, 0.2, 0.1, 0.05, 0.0)]
        assert scores == sorted(scores)
        assert scores[-1] == pytest.approx(1.0)

    def test_segment_order_independent(self):
        mask = create_mask([DIAGONAL], 128, 128, thickness=10, blur_radius=5)
        seg_a = [[0.1, 0.2], [0.3, 0.35], [0.5, 0.45]]
        seg_b = [[0.6, 0.9], [0.7, 0.72]]
        assert mask.compare([seg_a, seg_b]) == pytest.approx(mask.compare([seg_b, seg_a]))

    def test_single_point_query(self):
        mask = create_mask([DIAGONAL], 64, 64, thickness=4, blur_radius=0)
        assert mask.compare(Trail([[0.5, 0.5]])) == pytest.approx(1.0)

    @pytest.mark.parametrize("query", [[], [[]], [[], [], []]])
    def test_no_points_raises(self, query):
        mask = create_mask([DIAGONAL], 32, 32)
        with pytest.raises(InvalidInput):
            mask.compare(query)

    def test_compare_batch(self):
        mask = create_mask([DIAGONAL], 64, 64, thickness=8, blur_radius=4)
        queries = [[DIAGONAL], [[[-1.0, -1.0]]], [ANTI_DIAGONAL]]
        results = mask.compare_batch(queries)
        assert len(results) == 3
        assert results[0] == pytest.approx(mask.compare([DIAGONAL]))
        assert results[1] == 0.0

    def test_compare_batch_logs_progress(self, caplog):
        mask = create_mask([DIAGONAL], 32, 32, thickness=4, blur_radius=0)
        with caplog.at_level(logging.INFO, logger="trailmask"):
            mask.compare_batch([[DIAGONAL]] * 3, verbose=True)
        assert "Compared 3 queries" in caplog.text

    def test_compare_batch_propagates_errors(self):
        mask = create_mask([DIAGONAL], 32, 32)
        with pytest.raises(InvalidInput):
            mask.compare_batch([[DIAGONAL], []])


class TestUpdate:
    """Tests for regenerating the mask."""

    def test_update_trails_replaces_raster(self):
        mask = create_mask([DIAGONAL], 96, 96, thickness=8, blur_radius=4)
        mask.update(trails=[ANTI_DIAGONAL])
        fresh = create_mask([ANTI_DIAGONAL], 96, 96, thickness=8, blur_radius=4)
        np.testing.assert_array_equal(mask.raster(), fresh.raster())
        # No residue from the old trail near its end point
        assert mask.raster()[10, 10] == 0

    def test_update_thickness_only(self):
        mask = create_mask([DIAGONAL], 64, 64, thickness=2, blur_radius=0)
        before = int(np.count_nonzero(mask.raster()))
        mask.update(thickness=10)
        assert mask.thickness == 10.0
        assert mask.trails[0] == Trail(DIAGONAL)
        assert int(np.count_nonzero(mask.raster())) > before

    def test_update_blur_only(self):
        mask = create_mask([DIAGONAL], 64, 64, thickness=2, blur_radius=0)
        mask.update(blur_radius=6)
        expected = create_mask([DIAGONAL], 64, 64, thickness=2, blur_radius=6)
        np.testing.assert_array_equal(mask.raster(), expected.raster())

    def test_update_to_empty(self):
        mask = create_mask([DIAGONAL], 32, 32)
        mask.update(trails=[])
        assert not mask.raster().any()

    def test_previous_raster_not_mutated(self):
        mask = create_mask([DIAGONAL], 64, 64, thickness=6, blur_radius=3)
        old = mask.raster()
        snapshot = old.copy()
        mask.update(trails=[ANTI_DIAGONAL])
        assert mask.raster() is not old
        np.testing.assert_array_equal(old, snapshot)

    def test_no_op_update_warns(self, caplog):
        mask = create_mask([DIAGONAL], 32, 32, thickness=4, blur_radius=2)
        old = mask.raster()
        with caplog.at_level(logging.WARNING, logger="trailmask"):
            with pytest.warns(NoOpWarning):
                mask.update()
        assert mask.raster() is old
        assert "ignoring update" in caplog.text

    def test_invalid_update_leaves_mask_unchanged(self):
        mask = create_mask([DIAGONAL], 32, 32, thickness=4, blur_radius=2)
        old = mask.raster()
        with pytest.raises(InvalidInput):
            mask.update(thickness=-5)
        with pytest.raises(InvalidInput):
            mask.update(trails=[[[0.1]]])
        assert mask.raster() is old
        assert mask.thickness == 4.0

    def test_concurrent_compare_sees_whole_raster(self):
        mask = create_mask([DIAGONAL], 64, 64, thickness=6, blur_radius=0)
        valid = {
            mask.compare([DIAGONAL]),
            create_mask([ANTI_DIAGONAL], 64, 64, thickness=6, blur_radius=0).compare([DIAGONAL]),
        }
        errors = []

        def reader():
            for _ in range(50):
                s = mask.compare([DIAGONAL])
                if s not in valid:
                    errors.append(s)

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for i in range(5):
            mask.update(trails=[ANTI_DIAGONAL] if i % 2 == 0 else [DIAGONAL])
        for t in threads:
            t.join()
        assert errors == []


class TestSummary:
    """Tests for mask introspection helpers."""

    def test_summary(self):
        mask = create_mask([DIAGONAL, [[0.2, 0.8]]], 64, 64, thickness=4, blur_radius=0)
        info = mask.summary()
        assert info["width"] == 64
        assert info["height"] == 64
        assert info["num_trails"] == 2
        assert info["num_points"] == 4
        assert info["max_intensity"] == 255
        assert 0.0 < info["coverage"] < 1.0

    def test_repr(self):
        mask = create_mask([DIAGONAL], 32, 16, thickness=4, blur_radius=2)
        assert "width=32" in repr(mask)
        assert "num_trails=1" in repr(mask)
