"""Vocoder rendering command."""

from typing import Optional

import click


@click.command("vocode")
@click.argument("modulator", type=click.Path(exists=True, dir_okay=False))
@click.argument("carrier", type=click.Path(exists=True, dir_okay=False))
@click.option("--output", "-o", default=None, help="Output WAV path (default: vocoded_<uuid>.wav)")
@click.option(
    "--width",
    "-w",
    default=None,
    type=float,
    help="Band width 0-100: low is robotic, high is breathy (default: 50)",
)
@click.option(
    "--channel-policy",
    default=None,
    type=click.Choice(["mix", "first"]),
    help="How multi-channel input is reduced to mono (default: mix)",
)
@click.option("--config", "config_path", default=None, type=click.Path(), help="Config file path")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging and each stage")
def vocode(
    modulator: str,
    carrier: str,
    output: Optional[str],
    width: Optional[float],
    channel_policy: Optional[str],
    config_path: Optional[str],
    verbose: bool,
) -> None:
    """Impose the MODULATOR's spectral envelope on the CARRIER.

    MODULATOR is typically speech, CARRIER a synth tone or noise. Audio
    files (wav, mp3, flac, ogg, m4a) and video files (mp4, mov, mkv, avi,
    webm) are accepted; the result is a mono 48 kHz WAV file.

    Examples:
        bandvocoder vocode speech.wav synth.wav
        bandvocoder vocode speech.mp3 noise.wav -w 80 -o robot.wav
    """
    from bandvocoder.cli.progress import print_stage, print_summary, status
    from bandvocoder.cli.service_helpers import (
        exit_with_error,
        handle_result,
        load_cli_config,
        vocoder_service,
    )
    from bandvocoder.core.globals import DEFAULT_WIDTH
    from bandvocoder.core.logger import set_level

    config = load_cli_config(config_path)
    try:
        set_level("DEBUG" if verbose else config.get("logging", "level", "INFO"))
    except ValueError as e:
        exit_with_error(str(e))

    if channel_policy:
        config.set("engine", "channel_policy", channel_policy)
    if width is None:
        width = config.get("engine", "default_width", DEFAULT_WIDTH)

    service = vocoder_service(config)

    if verbose:
        service.set_progress_callback(print_stage)
        result = service.vocode_file(modulator, carrier, output_path=output, width=width)
    else:
        with status("Vocoding..."):
            result = service.vocode_file(modulator, carrier, output_path=output, width=width)

    summary = handle_result(result)

    click.echo(result.message)
    click.echo(f"Output: {summary.output_path}")

    if verbose:
        print_summary(
            "Render",
            {
                "Duration (s)": summary.duration_seconds,
                "Samples": summary.num_samples,
                "Q": summary.q_factor,
                "Peak": summary.peak,
            },
        )
