import asyncio
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.const import DEFAULT_VOICE_CLONE_MODEL, RESOURCE_MODE_URL
from minimax_mcp.errors import MinimaxRequestError
from minimax_mcp.files import build_output_file, file_stem, write_file
from minimax_mcp.logging import get_logger
from minimax_mcp.models.tool_args import VoiceCloneArgs

logger = get_logger("api.voice_clone")


async def _upload_audio(client: MinimaxClient, args: VoiceCloneArgs) -> int | str:
    if args.is_url:
        content = await client.download(args.audio_file)
        name = Path(urlparse(args.audio_file).path).name or "voice_clone_source.mp3"
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / name
            await asyncio.to_thread(path.write_bytes, content)
            response = await client.upload("/v1/files/upload", path, {"purpose": "voice_clone"})
    else:
        path = Path(args.audio_file).expanduser()
        if not path.is_file():
            raise MinimaxRequestError(f"Audio file does not exist: {args.audio_file}")
        response = await client.upload("/v1/files/upload", path, {"purpose": "voice_clone"})

    file_id = (response.get("file") or {}).get("file_id")
    if not file_id:
        raise MinimaxRequestError("Failed to get file_id from upload response")
    return file_id


async def clone_voice(client: MinimaxClient, args: VoiceCloneArgs) -> str:
    """Clone a voice and return a description of the result.

    When demo text is given, the API renders a demo clip which is returned
    as a URL or saved locally depending on the resource mode.
    """
    config = client.config
    file_id = await _upload_audio(client, args)

    payload: dict[str, Any] = {"file_id": file_id, "voice_id": args.voice_id}
    if args.text:
        payload["text"] = args.text
        payload["model"] = DEFAULT_VOICE_CLONE_MODEL
    response = await client.post("/v1/voice_clone", payload)

    demo_audio = response.get("demo_audio")
    if not demo_audio:
        return args.voice_id

    if config.resource_mode == RESOURCE_MODE_URL:
        return f"{args.voice_id}, demo audio: {demo_audio}"

    output_file = build_output_file(
        file_stem("voice_clone", args.text or args.voice_id),
        args.output_directory,
        config.base_path,
        "wav",
    )
    await write_file(output_file, await client.download(demo_audio))
    logger.info(f"Demo audio saved to {output_file}")
    return f"{args.voice_id}, demo audio saved: {output_file}"
