"""
Tests für die vollständige Analysekette.
"""

from datetime import datetime, timezone

import pytest
import numpy as np

from pamguide.core.analysis import analyze_file
from pamguide.core.config import AnalysisConfig, AnalysisType, Environment, WindowUnit
from pamguide.core.errors import InvalidFrequencyRangeError, InvalidWindowError
from pamguide.core.levels import power_to_db
from pamguide.core.windows import WindowType, generate_window


def make_config(**overrides) -> AnalysisConfig:
    values = dict(
        analysis_type=AnalysisType.PSD,
        environment=Environment.AIR,
        low_cutoff=100.0,
        high_cutoff=2000.0,
        window_type=WindowType.HANN,
        window_length=1.0,
        overlap_percentage=50.0,
    )
    values.update(overrides)
    return AnalysisConfig(**values)


def tone(freq=1000.0, sr=8000, duration=2.0, amplitude=0.5):
    t = np.arange(int(sr * duration)) / sr
    return amplitude * np.sin(2 * np.pi * freq * t)


class TestToneAnalysis:
    """Ende-zu-Ende-Test mit synthetischem Sinuston."""

    def test_psd_peak(self):
        """1 kHz Ton erscheint im 1 kHz Bin, Rest mindestens 20 dB tiefer."""
        result = analyze_file(tone(), 8000, make_config(), sensitivity_db=0.0)

        freqs = result.frequencies
        assert result.num_rows == 3
        assert len(freqs) == 1901

        peak = np.argmin(np.abs(freqs - 1000.0))
        # Hauptkeule des Hann-Fensters reicht ±1 Bin
        outside = np.abs(freqs - 1000.0) > 1.0
        for row in result.levels:
            assert np.argmax(row) == peak
            assert np.all(row[peak] - row[outside] >= 20.0)

    def test_row_times(self):
        """Zeilen liegen im Abstand step/fs."""
        result = analyze_file(tone(), 8000, make_config(), sensitivity_db=0.0)

        np.testing.assert_allclose(result.times, [0.0, 0.5, 1.0])

    def test_tone_level(self):
        """Breitbandpegel entspricht A²/2 · B (Leckage in die Nachbarbins)."""
        config = make_config(analysis_type=AnalysisType.BROADBAND,
                             environment=Environment.WATER)

        result = analyze_file(tone(amplitude=0.5), 8000, config, sensitivity_db=0.0)

        expected = 10 * np.log10(0.5 ** 2 / 2 * 1.5)
        np.testing.assert_allclose(result.levels[:, 0], expected, atol=1e-6)

    def test_sensitivity_offset(self):
        """S wird von jedem Pegel abgezogen."""
        config = make_config()

        plain = analyze_file(tone(), 8000, config, sensitivity_db=0.0)
        calibrated = analyze_file(tone(), 8000, config, sensitivity_db=-150.0)

        np.testing.assert_allclose(calibrated.levels, plain.levels + 150.0)

    def test_environment_reference(self):
        """Luft liegt 20·log10(20) dB unter Wasser."""
        data = tone()
        air = analyze_file(data, 8000, make_config(environment=Environment.AIR), 0.0)
        water = analyze_file(data, 8000, make_config(environment=Environment.WATER), 0.0)

        peak = np.argmax(water.levels[0])
        assert water.levels[0, peak] - air.levels[0, peak] == \
            pytest.approx(20 * np.log10(20))

    def test_absolute_start_time(self):
        """Startzeit verschiebt die Zeitspalte."""
        start = datetime(2024, 7, 17, 16, 47, 21)

        result = analyze_file(tone(), 8000, make_config(), 0.0, start_time=start)

        base = start.replace(tzinfo=timezone.utc).timestamp()
        np.testing.assert_allclose(result.times, base + np.array([0.0, 0.5, 1.0]))


class TestConsistency:
    """Tests für die Konsistenz zwischen PSD und Breitband."""

    @pytest.mark.parametrize("window_type", list(WindowType))
    def test_psd_sums_to_broadband(self, window_type):
        """Entnormierte PSD-Summe reproduziert den Breitbandpegel."""
        rng = np.random.default_rng(7)
        data = np.clip(rng.standard_normal(16000) * 0.1, -1.0, 1.0)
        psd_config = make_config(window_type=window_type)
        bb_config = make_config(window_type=window_type,
                                analysis_type=AnalysisType.BROADBAND)

        psd = analyze_file(data, 8000, psd_config, 0.0)
        broadband = analyze_file(data, 8000, bb_config, 0.0)

        pref = psd_config.reference_pressure
        delf = 8000 / 8000
        bandwidth = generate_window(window_type, 8000).noise_bandwidth
        linear = 10 ** (psd.levels / 10) * pref ** 2 * delf * bandwidth
        rebuilt = power_to_db(linear.sum(axis=1), pref)

        np.testing.assert_allclose(rebuilt, broadband.levels[:, 0], rtol=1e-9)

    def test_silent_signal(self):
        """Stille ergibt -inf statt eines Fehlers."""
        config = make_config(analysis_type=AnalysisType.BROADBAND)

        result = analyze_file(np.zeros(16000), 8000, config, 0.0)

        assert np.all(np.isneginf(result.levels))


class TestWelchIntegration:
    """Tests für die Welch-Mittelung in der Analysekette."""

    def test_welch_rows_and_times(self):
        """31 Segmente mit k=4 ergeben 8 Zeilen im Abstand 4·step/fs."""
        config = make_config(window_length=1000, window_unit=WindowUnit.SAMPLES,
                             welch_factor=4)

        result = analyze_file(tone(), 8000, config, 0.0)

        assert result.num_rows == 8
        np.testing.assert_allclose(np.diff(result.times), 0.25)

    def test_welch_skipped_keeps_time_step(self):
        """Zu großer Faktor deaktiviert die Mittelung, Zeitschritt bleibt."""
        config = make_config(welch_factor=10)

        result = analyze_file(tone(), 8000, config, 0.0)

        assert result.num_rows == 3
        np.testing.assert_allclose(result.times, [0.0, 0.5, 1.0])

    def test_welch_reduces_variance(self):
        """Gemittelte Spektren schwanken weniger."""
        rng = np.random.default_rng(3)
        data = rng.standard_normal(80000) * 0.1
        plain = analyze_file(data, 8000, make_config(window_length=0.1), 0.0)
        averaged = analyze_file(data, 8000, make_config(window_length=0.1,
                                                        welch_factor=10), 0.0)

        assert np.std(averaged.levels) < np.std(plain.levels)


class TestAnalysisErrors:
    """Tests für Fehlerfälle."""

    def test_window_longer_than_signal(self):
        """Fenster länger als das Signal."""
        with pytest.raises(InvalidWindowError):
            analyze_file(tone(duration=0.5), 8000, make_config(), 0.0)

    def test_stereo_rejected(self):
        """Mehrkanalsignale werden abgelehnt."""
        with pytest.raises(ValueError, match="1D"):
            analyze_file(np.zeros((16000, 2)), 8000, make_config(), 0.0)

    def test_band_without_bins(self):
        """Band zwischen zwei Bins."""
        config = make_config(window_length=10, window_unit=WindowUnit.SAMPLES,
                             low_cutoff=850.0, high_cutoff=1500.0)

        with pytest.raises(InvalidFrequencyRangeError):
            analyze_file(tone(), 8000, config, 0.0)
