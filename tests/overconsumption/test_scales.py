"""Scale, tick and curve geometry tests."""

from datetime import date

import pytest

from src.overconsumption.curves import (area_path, monotone_segments,
                                        monotone_x_path, tangents)
from src.overconsumption.scales import (LinearScale, TimeScale, extent,
                                        format_tick, headroom_domain,
                                        linear_ticks, shift_years, tick_step,
                                        year_ticks)


class TestExtentAndShift:
    def test_extent(self):
        assert extent([3, 1, 2]) == (1, 3)

    def test_extent_empty_raises(self):
        with pytest.raises(ValueError):
            extent([])

    def test_shift_years_is_calendar_based(self):
        """2001-03-01 minus 2 years is 1999-03-01, not 730 days earlier (1999-03-02)"""
        assert shift_years(date(2001, 3, 1), -2) == date(1999, 3, 1)

    def test_shift_years_from_leap_day(self):
        assert shift_years(date(2000, 2, 29), -2) == date(1998, 2, 28)

    def test_headroom_domain(self):
        lo, hi = headroom_domain([10.0, 400.0, 250.0])
        assert lo == 0.0
        assert hi == pytest.approx(440.0)


class TestLinearScale:
    def test_maps_domain_to_range(self):
        scale = LinearScale(domain=(0.0, 100.0), range=(270.0, 0.0))

        assert scale(0.0) == 270.0
        assert scale(100.0) == 0.0
        assert scale(50.0) == pytest.approx(135.0)

    def test_degenerate_domain_maps_to_midpoint(self):
        scale = LinearScale(domain=(0.0, 0.0), range=(0.0, 200.0))
        assert scale(0.0) == 100.0

    def test_nice_ticks(self):
        assert linear_ticks(0, 440) == [0, 50, 100, 150, 200, 250, 300, 350, 400]
        assert linear_ticks(0, 99) == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90]

    def test_fractional_ticks_are_clean(self):
        ticks = linear_ticks(0, 1.3)
        assert ticks[:4] == [0.0, 0.1, 0.2, 0.3]

    def test_tick_step(self):
        assert tick_step(0, 440) == 50
        assert tick_step(0, 16.5) == 2
        assert tick_step(0, 0) == 0.0


class TestTimeScale:
    def test_maps_dates_linearly(self):
        scale = TimeScale(domain=(date(2010, 1, 1), date(2020, 1, 1)), range=(0.0, 620.0))

        assert scale(date(2010, 1, 1)) == 0.0
        assert scale(date(2020, 1, 1)) == 620.0
        assert 300 < scale(date(2015, 1, 1)) < 320

    def test_year_ticks_on_january_first(self):
        ticks = year_ticks(date(2010, 1, 1), date(2020, 1, 1))

        assert ticks[0] == date(2010, 1, 1)
        assert ticks[-1] == date(2020, 1, 1)
        assert all((t.month, t.day) == (1, 1) for t in ticks)

    def test_year_ticks_step_for_long_spans(self):
        ticks = year_ticks(date(1992, 7, 5), date(2023, 1, 1))

        assert ticks[0] == date(1994, 1, 1)
        assert [t.year for t in ticks][:3] == [1994, 1996, 1998]

    def test_short_span_falls_back_to_endpoints(self):
        ticks = year_ticks(date(2020, 3, 1), date(2020, 6, 1))
        assert ticks == [date(2020, 3, 1), date(2020, 6, 1)]


class TestTickFormat:
    def test_year(self):
        assert format_tick("year", date(2015, 1, 1)) == "2015"

    def test_number_grouping(self):
        assert format_tick("number", 150000.0, 50000) == "150,000"

    def test_percent(self):
        assert format_tick("percent", 12.0, 2) == "12%"
        assert format_tick("percent", 2.5, 0.5) == "2.5%"

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            format_tick("currency", 1.0)


class TestMonotoneCurve:
    def test_passes_through_all_points(self):
        points = [(0.0, 100.0), (10.0, 50.0), (20.0, 40.0), (30.0, 0.0)]
        segments = monotone_segments(points)

        assert segments[0] == "M 0,100"
        assert len(segments) == 4
        assert segments[1].endswith("10,50")
        assert segments[-1].endswith("30,0")
        assert all(s.startswith("C ") for s in segments[1:])

    def test_no_overshoot_on_flat_segment(self):
        """A local extremum gets a flat tangent, so control points stay level"""
        points = [(0.0, 10.0), (10.0, 0.0), (20.0, 10.0)]
        segments = monotone_segments(points)

        # First segment ends at the minimum with a flat incoming control point
        assert segments[1] == "C 3.333,3.333 6.667,0 10,0"

    def test_extremum_tangent_is_flat(self):
        slopes = tangents([(0.0, 10.0), (10.0, 0.0), (20.0, 10.0)])
        assert slopes[1] == pytest.approx(0.0)

    def test_control_points_stay_within_neighbours(self):
        """A rising series never dips between its points"""
        points = [(0.0, 0.0), (10.0, 1.0), (20.0, 50.0), (30.0, 51.0)]
        for segment, (lo, hi) in zip(monotone_segments(points)[1:], zip(points, points[1:])):
            for pair in segment[2:].split(" ")[:2]:
                y = float(pair.split(",")[1])
                assert lo[1] <= y <= hi[1]

    def test_x_reversal_starts_new_run(self):
        assert monotone_x_path([(0, 0), (10, 10), (5, 20)]) == "M 0,0 L 10,10 L 5,20"

    def test_two_points_straight_line(self):
        assert monotone_x_path([(0, 0), (5, 5)]) == "M 0,0 L 5,5"

    def test_single_point_closed(self):
        assert monotone_x_path([(1, 2)]) == "M 1,2 Z"

    def test_coincident_points_ignored(self):
        assert monotone_x_path([(0, 0), (0, 0), (5, 5)]) == "M 0,0 L 5,5"

    def test_empty(self):
        assert monotone_x_path([]) == ""
        assert area_path([], 100) == ""

    def test_area_closes_on_baseline(self):
        d = area_path([(0, 10), (50, 5), (100, 0)], baseline=270)

        assert d.startswith("M 0,10")
        assert d.endswith("L 100,270 L 0,270 Z")
