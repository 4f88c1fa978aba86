from typing import Any

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.const import DEFAULT_MUSIC_MODEL, RESOURCE_MODE_URL
from minimax_mcp.errors import MinimaxRequestError
from minimax_mcp.files import build_output_file, decode_hex, file_stem, write_file
from minimax_mcp.logging import get_logger
from minimax_mcp.models.tool_args import MusicGenerationArgs

logger = get_logger("api.music")

VALID_SAMPLE_RATES = (16000, 24000, 32000, 44100)
VALID_BITRATES = (32000, 64000, 128000, 256000)
VALID_CHANNELS = (1, 2)
VALID_FORMATS = ("mp3", "pcm", "wav")


def closest_valid(value: int | None, valid: tuple[int, ...], default: int, label: str) -> int:
    """Snap ``value`` to the nearest supported value, ties going to the lower one."""
    if value is None:
        return default
    if value in valid:
        return value
    closest = min(valid, key=lambda candidate: abs(candidate - value))
    logger.warning(f"Provided {label} {value} is invalid, using closest valid value {closest}")
    return closest


def valid_format(fmt: str | None) -> str:
    if not fmt:
        return "mp3"
    if fmt not in VALID_FORMATS:
        logger.warning(f"Provided format {fmt} is invalid, using default value mp3")
        return "mp3"
    return fmt


def build_music_payload(args: MusicGenerationArgs, resource_mode: str) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "model": DEFAULT_MUSIC_MODEL,
        "prompt": args.prompt,
        "lyrics": args.lyrics,
        "audio_setting": {
            "sample_rate": closest_valid(args.sample_rate, VALID_SAMPLE_RATES, 32000, "sample rate"),
            "bitrate": closest_valid(args.bitrate, VALID_BITRATES, 128000, "bitrate"),
            "format": valid_format(args.format),
            "channel": closest_valid(args.channel, VALID_CHANNELS, 1, "channel"),
        },
    }
    if resource_mode == RESOURCE_MODE_URL:
        payload["output_format"] = "url"
    return payload


async def generate_music(client: MinimaxClient, args: MusicGenerationArgs) -> str:
    """Generate a track and return its URL or saved path."""
    config = client.config
    payload = build_music_payload(args, config.resource_mode)
    response = await client.post("/v1/music_generation", payload)

    audio = (response.get("data") or {}).get("audio")
    if not audio:
        raise MinimaxRequestError("Could not get audio data from response")

    if config.resource_mode == RESOURCE_MODE_URL:
        return audio

    output_file = build_output_file(
        file_stem("music", args.prompt),
        args.output_directory,
        config.base_path,
        payload["audio_setting"]["format"],
    )
    await write_file(output_file, decode_hex(audio))
    logger.info(f"Music saved to {output_file}")
    return str(output_file)
