"""Local audio playback through whichever command-line player is installed."""

import asyncio
import shutil
from pathlib import Path

from minimax_mcp.errors import MinimaxRequestError
from minimax_mcp.logging import get_logger
from minimax_mcp.models.tool_args import PlayAudioArgs

logger = get_logger("audio")

SUPPORTED_EXTENSIONS = {".mp3", ".wav"}

# Player -> arguments placed before the input
PLAYERS: dict[str, list[str]] = {
    "ffplay": ["-nodisp", "-autoexit", "-loglevel", "quiet"],
    "afplay": [],
    "aplay": [],
}


def find_player() -> tuple[str, list[str]]:
    for name, player_args in PLAYERS.items():
        path = shutil.which(name)
        if path:
            return path, player_args
    raise MinimaxRequestError("No audio player found. Install ffmpeg (ffplay) to play audio.")


async def play_audio(args: PlayAudioArgs) -> str:
    source = args.input_file_path
    if not args.is_url:
        path = Path(source).expanduser()
        if not path.is_file():
            raise MinimaxRequestError(f"Audio file does not exist: {source}")
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise MinimaxRequestError(f"Unsupported audio format: {path.suffix}. Supported: mp3, wav")
        source = str(path)

    player, player_args = find_player()
    if args.is_url and Path(player).stem != "ffplay":
        raise MinimaxRequestError("Playing audio from a URL requires ffplay")

    logger.info(f"Playing {source}")
    process = await asyncio.create_subprocess_exec(
        player,
        *player_args,
        source,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.DEVNULL,
    )
    return_code = await process.wait()
    if return_code != 0:
        raise MinimaxRequestError(f"Audio player exited with status {return_code}")
    return f"Successfully played audio: {args.input_file_path}"
