"""
Row Sampling Tests
==================

Tests for row offsets, sample coordinates and RowGeometry.
"""

import math

import pytest


class TestRowLayout:
    """Tests for the page-space placement of rows and samples."""

    def test_row_offset(self):
        """Row 0 sits at height - 2 * vertical margin; rows step upwards."""
        from slopes.terrain.rows import row_offset

        assert row_offset(0, 200, 10, 5) == 180
        assert row_offset(1, 200, 10, 5) == 175
        assert row_offset(10, 200, 10, 5) == 130

    def test_sample_coordinates(self):
        """Heights in [-1, 1] map onto [-row_height, row_height] around the offset."""
        from slopes.terrain.rows import sample_coordinates

        kwargs = dict(
            sample_index=3,
            distance_between_samples=2.0,
            offset=100.0,
            row_height=20.0,
            horizontal_margin=5.0,
        )
        assert sample_coordinates(value=0.0, **kwargs).as_tuple() == (11.0, 100.0)
        assert sample_coordinates(value=1.0, **kwargs).y == pytest.approx(120.0)
        assert sample_coordinates(value=-1.0, **kwargs).y == pytest.approx(80.0)
        assert sample_coordinates(value=1.0, amplification=0.5, **kwargs).y == pytest.approx(110.0)


class TestRowSampler:
    """Tests for RowSampler and RowGeometry."""

    def test_scenario_row_points(self, scenario_config, valley_oracle):
        """Both scenario rows match hand-computed coordinates."""
        from slopes.terrain.envelope import AmplitudeEnvelope
        from slopes.terrain.rows import RowSampler

        envelope = AmplitudeEnvelope(valley_oracle, 4, 1.0)
        sampler = RowSampler(scenario_config, envelope)

        row0 = sampler.sample_row(0)
        row1 = sampler.sample_row(1)

        assert [p.as_tuple() for p in row0.points] == [
            pytest.approx((20.0, 180.0)),
            pytest.approx((110.0, 178.9375)),
            pytest.approx((200.0, 163.0)),
            pytest.approx((290.0, 178.9375)),
        ]
        assert [p.as_tuple() for p in row1.points] == [
            pytest.approx((20.0, 175.0)),
            pytest.approx((110.0, 175.625)),
            pytest.approx((200.0, 185.0)),
            pytest.approx((290.0, 175.625)),
        ]
        assert row0.offset == 180
        assert row0.max_displacement == pytest.approx(20.0)

    def test_segments_connect_adjacent_samples(self, scenario_config, valley_oracle):
        """Segment i joins samples i-1 and i of the same row."""
        from slopes.terrain.envelope import AmplitudeEnvelope
        from slopes.terrain.rows import RowSampler

        row = RowSampler(scenario_config, AmplitudeEnvelope(valley_oracle, 4, 1.0)).sample_row(1)
        segments = row.segments()

        assert len(segments) == 3
        for i, segment in enumerate(segments, start=1):
            assert segment.start == row.points[i - 1]
            assert segment.end == row.points[i]
            assert segment.row_index == 1
            assert segment.sample_index == i

    def test_segment_index_bounds(self, scenario_config, valley_oracle):
        """The first sample has no predecessor."""
        from slopes.terrain.envelope import AmplitudeEnvelope
        from slopes.terrain.rows import RowSampler

        row = RowSampler(scenario_config, AmplitudeEnvelope(valley_oracle, 4, 1.0)).sample_row(0)
        with pytest.raises(IndexError):
            row.segment(0)
        with pytest.raises(IndexError):
            row.segment(4)

    def test_non_finite_sample_drops_touching_segments(self, scenario_config):
        """A poisoned sample removes both segments that touch it."""
        from slopes.noise import MockNoiseOracle
        from slopes.terrain.envelope import AmplitudeEnvelope
        from slopes.terrain.rows import RowSampler

        oracle = MockNoiseOracle(lambda x, y: math.nan if x == 5.0 else 0.0)
        row = RowSampler(scenario_config, AmplitudeEnvelope(oracle, 4, 1.0)).sample_row(0)

        assert row.skipped_samples == 1
        assert row.segment(1) is not None
        assert row.segment(2) is None
        assert row.segment(3) is None

    def test_mismatched_envelope_rejected(self, scenario_config, valley_oracle):
        """Sampler and envelope must agree on the resolution."""
        from slopes.terrain.envelope import AmplitudeEnvelope
        from slopes.terrain.rows import RowSampler

        with pytest.raises(ValueError):
            RowSampler(scenario_config, AmplitudeEnvelope(valley_oracle, 8, 1.0))
