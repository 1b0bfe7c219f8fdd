"""
Tests für Segmentierung und parallele Spektralschätzung.
"""

import pytest
import numpy as np

from pamguide.core.errors import InvalidWindowError, SignalTooShortError, ZeroStepError
from pamguide.core.segmentation import (
    SegmentPlan,
    compute_segment_powers,
    plan_segments,
    round_half_up,
    segment_power,
)
from pamguide.core.spectral import select_frequency_range
from pamguide.core.windows import WindowType, generate_window


class TestRounding:
    """Tests für die Rundung der Schrittweite."""

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3), (3.5, 4), (2.4999, 2), (0.5, 1), (0.49, 0), (250.0, 250),
    ])
    def test_half_away_from_zero(self, value, expected):
        """Halbe Werte werden aufgerundet (kein Banker's Rounding)."""
        assert round_half_up(value) == expected


class TestSegmentPlan:
    """Tests für die Segmentaufteilung."""

    def test_half_overlap(self):
        """T=1000, N=500, 50 % → Schritt 250, 3 Segmente."""
        plan = plan_segments(1000, 500, 0.5)

        assert plan.step == 250
        assert plan.num_segments == 3

    def test_no_overlap(self):
        """Ohne Überlappung entspricht der Schritt der Fensterlänge."""
        plan = plan_segments(1000, 100, 0.0)

        assert plan.step == 100
        assert plan.num_segments == 10

    def test_step_rounds_half_up(self):
        """N=5 bei 50 % ergibt Schritt 3."""
        plan = plan_segments(11, 5, 0.5)

        assert plan.step == 3
        assert plan.num_segments == 3

    def test_trailing_samples_ignored(self):
        """Unvollständige Segmente am Ende entfallen (kein Zero-Padding)."""
        plan = plan_segments(1100, 500, 0.5)

        assert plan.num_segments == 3
        assert plan.bounds(plan.num_segments - 1)[1] <= 1100

    def test_window_equals_signal(self):
        """Fenster so lang wie das Signal ergibt genau ein Segment."""
        plan = plan_segments(500, 500, 0.5)

        assert plan.num_segments == 1

    def test_bounds(self):
        """Segment i beginnt bei i·step."""
        plan = SegmentPlan(window_length=500, step=250, num_segments=3)

        assert plan.bounds(0) == (0, 500)
        assert plan.bounds(2) == (500, 1000)

    def test_zero_window(self):
        """Fensterlänge 0 wird abgelehnt."""
        with pytest.raises(InvalidWindowError):
            plan_segments(1000, 0, 0.5)

    def test_window_longer_than_signal(self):
        """Fenster länger als Signal wird abgelehnt."""
        with pytest.raises(InvalidWindowError):
            plan_segments(1000, 1001, 0.5)

    def test_zero_step(self):
        """Überlappung nahe 100 % ergibt Schritt 0."""
        with pytest.raises(ZeroStepError):
            plan_segments(1000, 100, 0.999)

    def test_error_hierarchy(self):
        """Alle Segmentierungsfehler sind ValueErrors."""
        assert issubclass(InvalidWindowError, ValueError)
        assert issubclass(ZeroStepError, ValueError)
        assert issubclass(SignalTooShortError, ValueError)


class TestSegmentPowers:
    """Tests für die parallele Berechnung der Segmentspektren."""

    def _setup(self, n_total=4000, n=400, overlap=0.5):
        rng = np.random.default_rng(42)
        # Amplitude steigt von Segment zu Segment
        samples = rng.standard_normal(n_total) * np.linspace(0.01, 1.0, n_total)
        window = generate_window(WindowType.HANN, n)
        plan = plan_segments(n_total, n, overlap)
        selection = select_frequency_range(8000, n, 100.0, 3000.0)
        return samples, window, plan, selection

    def test_shape(self):
        """Eine Zeile pro Segment, eine Spalte pro gewähltem Bin."""
        samples, window, plan, selection = self._setup()

        powers = compute_segment_powers(samples, window, plan, selection)

        assert powers.shape == (plan.num_segments, selection.num_bins)

    @pytest.mark.parametrize("workers", [1, 4, None])
    def test_order_is_preserved(self, workers):
        """Reihenfolge entspricht dem Segmentindex, unabhängig von Threads."""
        samples, window, plan, selection = self._setup()

        powers = compute_segment_powers(
            samples, window, plan, selection, max_workers=workers
        )

        for i in range(plan.num_segments):
            np.testing.assert_array_equal(
                powers[i], segment_power(samples, window, plan, selection, i)
            )

    def test_rising_amplitude(self):
        """Lautere Segmente haben mehr Leistung."""
        samples, window, plan, selection = self._setup()

        totals = compute_segment_powers(samples, window, plan, selection).sum(axis=1)

        assert totals[-1] > totals[0]

    def test_input_not_modified(self):
        """Signal bleibt unverändert."""
        samples, window, plan, selection = self._setup()
        original = samples.copy()

        compute_segment_powers(samples, window, plan, selection)

        np.testing.assert_array_equal(samples, original)
