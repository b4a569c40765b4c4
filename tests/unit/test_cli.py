"""
Unit tests for the bandvocoder command line interface.
"""

from pathlib import Path

import pytest
import soundfile as sf
from click.testing import CliRunner

from bandvocoder import __version__
from bandvocoder.cli.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCliGroup:
    """Tests for the top-level group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "vocode" in result.output
        assert "config" in result.output


class TestVocodeCommand:
    """Tests for 'bandvocoder vocode'."""

    def test_vocode_writes_output(self, runner, isolated_config, modulator_file, carrier_file):
        output = isolated_config / "out" / "robot.wav"

        result = runner.invoke(
            cli, ["vocode", modulator_file, carrier_file, "-o", str(output), "-w", "80"]
        )

        assert result.exit_code == 0, result.output
        assert "Vocoding complete! Width: 80%" in result.output
        assert str(output) in result.output
        info = sf.info(str(output))
        assert info.samplerate == 48000
        assert info.channels == 1

    def test_vocode_default_output_name(self, runner, isolated_config, modulator_file, carrier_file):
        result = runner.invoke(cli, ["vocode", modulator_file, carrier_file])

        assert result.exit_code == 0, result.output
        assert "Vocoding complete! Width: 50%" in result.output
        written = list(Path(isolated_config).glob("vocoded_*.wav"))
        assert len(written) == 1

    def test_vocode_verbose_with_channel_policy(
        self, runner, isolated_config, modulator_file, carrier_file
    ):
        result = runner.invoke(
            cli,
            ["vocode", modulator_file, carrier_file, "--channel-policy", "first", "-v", "-o", "v.wav"],
        )

        assert result.exit_code == 0, result.output
        assert "rendering" in result.output

    def test_vocode_width_from_config(self, runner, isolated_config, modulator_file, carrier_file):
        config_file = isolated_config / "bandvocoder.cfg.toml"
        config_file.write_text("[engine]\ndefault_width = 20\n")

        result = runner.invoke(
            cli, ["vocode", modulator_file, carrier_file, "--config", str(config_file), "-o", "c.wav"]
        )

        assert result.exit_code == 0, result.output
        assert "Width: 20%" in result.output

    def test_invalid_width_exits_1(self, runner, isolated_config, modulator_file, carrier_file):
        result = runner.invoke(
            cli, ["vocode", modulator_file, carrier_file, "-w", "150", "-o", "bad.wav"]
        )

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not (isolated_config / "bad.wav").exists()

    def test_unsupported_file_type_exits_1(self, runner, isolated_config, carrier_file):
        notes = isolated_config / "notes.txt"
        notes.write_text("hello")

        result = runner.invoke(cli, ["vocode", str(notes), carrier_file])

        assert result.exit_code == 1
        assert "Unsupported file type" in result.output

    def test_missing_file_is_usage_error(self, runner, isolated_config, carrier_file):
        result = runner.invoke(cli, ["vocode", "nope.wav", carrier_file])
        assert result.exit_code == 2

    def test_invalid_config_exits_1(self, runner, isolated_config, modulator_file, carrier_file):
        config_file = isolated_config / "bad.toml"
        config_file.write_text("[engine]\nband_count = 8\n")

        result = runner.invoke(
            cli, ["vocode", modulator_file, carrier_file, "--config", str(config_file)]
        )

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestConfigCommands:
    """Tests for 'bandvocoder config'."""

    def test_config_show(self, runner, isolated_config):
        result = runner.invoke(cli, ["config", "show"])
        assert result.exit_code == 0
        assert "[engine]" in result.output
        assert "band_count = 16" in result.output

    def test_config_init(self, runner, isolated_config):
        result = runner.invoke(cli, ["config", "init"])

        assert result.exit_code == 0
        assert (isolated_config / "bandvocoder.toml").exists()

    def test_config_init_refuses_overwrite(self, runner, isolated_config):
        runner.invoke(cli, ["config", "init"])
        result = runner.invoke(cli, ["config", "init"])

        assert result.exit_code == 1
        assert "--force" in result.output

        forced = runner.invoke(cli, ["config", "init", "--force"])
        assert forced.exit_code == 0

    def test_config_path(self, runner, isolated_config):
        result = runner.invoke(cli, ["config", "path"])
        assert result.exit_code == 0
        assert "Configuration File Search Paths" in result.output
