"""
Tests für die Kommandozeile.
"""

import numpy as np

from pamguide.cli import main
from pamguide.core.audio_io import save_audio


CONFIG = """
input_path = "{input}"
output_dir = "{output}"
analysis_type = "psd"
environment = "wat"
low_cutoff = 100.0
high_cutoff = 2000.0
"""


def setup_files(tmp_path):
    wav = tmp_path / "rec.wav"
    save_audio(0.1 * np.sin(2 * np.pi * 500 * np.arange(16000) / 8000), wav, 8000)
    config = tmp_path / "config.toml"
    config.write_text(CONFIG.format(input=wav.as_posix(), output=(tmp_path / "out").as_posix()))
    return wav, config


class TestCommandLine:
    """Tests für den Programmeinstieg."""

    def test_single_file(self, tmp_path):
        """Einzeldatei aus der Konfiguration."""
        _, config = setup_files(tmp_path)

        assert main(["-c", str(config)]) == 0
        assert len(list((tmp_path / "out").glob("*.csv"))) == 1

    def test_input_override(self, tmp_path):
        """--input überschreibt input_path."""
        _, config = setup_files(tmp_path)

        assert main(["-c", str(config), "-i", str(tmp_path)]) == 0
        assert len(list((tmp_path / "out").glob("PAMGuide_Batch_*.csv"))) == 1

    def test_missing_input(self, tmp_path):
        """Nicht existierender Eingabepfad."""
        _, config = setup_files(tmp_path)

        assert main(["-c", str(config), "-i", str(tmp_path / "missing")]) == 1

    def test_missing_config(self, tmp_path):
        """Nicht existierende Konfiguration."""
        assert main(["-c", str(tmp_path / "missing.toml")]) == 1

    def test_broadband_test(self, tmp_path, capsys):
        """Diagnosebericht wird ausgegeben."""
        wav, config = setup_files(tmp_path)

        assert main(["-c", str(config), "--broadband-test", "--test-wav", str(wav)]) == 0
        assert "BROADBAND ANALYSIS TEST" in capsys.readouterr().out

    def test_broadband_test_requires_wav(self, tmp_path):
        """--broadband-test ohne --test-wav."""
        _, config = setup_files(tmp_path)

        assert main(["-c", str(config), "--broadband-test"]) == 1

    def test_wrong_value_type(self, tmp_path):
        """Falscher Werttyp in der Konfiguration ergibt Exit-Code 1."""
        _, config = setup_files(tmp_path)
        config.write_text(config.read_text() + 'overlap_percentage = "50"\n')

        assert main(["-c", str(config)]) == 1
