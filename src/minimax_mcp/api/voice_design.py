from dataclasses import dataclass
from typing import Any

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.errors import MinimaxRequestError
from minimax_mcp.files import build_output_file, decode_hex, file_stem, write_file
from minimax_mcp.logging import get_logger
from minimax_mcp.models.tool_args import VoiceDesignArgs

logger = get_logger("api.voice_design")


@dataclass(slots=True)
class VoiceDesignResult:
    voice_id: str
    output_file: str


async def design_voice(client: MinimaxClient, args: VoiceDesignArgs) -> VoiceDesignResult:
    payload: dict[str, Any] = {"prompt": args.prompt, "preview_text": args.preview_text}
    if args.voice_id:
        payload["voice_id"] = args.voice_id
    response = await client.post("/v1/voice_design", payload)

    trial_audio = response.get("trial_audio")
    if not trial_audio:
        raise MinimaxRequestError("Could not get audio data from response")

    # The trial clip is always returned hex-encoded, so it is saved in both modes
    output_file = build_output_file(
        file_stem("voice_design", args.prompt),
        args.output_directory,
        client.config.base_path,
        "mp3",
    )
    await write_file(output_file, decode_hex(trial_audio))
    logger.info(f"Voice design preview saved to {output_file}")
    return VoiceDesignResult(voice_id=response.get("voice_id") or "", output_file=str(output_file))
