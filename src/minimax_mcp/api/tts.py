from dataclasses import dataclass
from typing import Any

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.const import RESOURCE_MODE_URL
from minimax_mcp.errors import MinimaxRequestError
from minimax_mcp.files import OutputFiles, build_output_file, decode_hex, file_stem
from minimax_mcp.logging import get_logger
from minimax_mcp.models.tool_args import TextToAudioArgs

logger = get_logger("api.tts")


@dataclass(slots=True)
class SpeechResult:
    audio: str
    subtitle: str | None = None


def build_speech_payload(args: TextToAudioArgs, resource_mode: str) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "model": args.model,
        "text": args.text,
        "voice_setting": {
            "voice_id": args.voice_id,
            "speed": args.speed,
            "vol": args.vol,
            "pitch": args.pitch,
            "emotion": args.emotion,
        },
        "audio_setting": {
            "sample_rate": args.sample_rate,
            "bitrate": args.bitrate,
            "format": args.format,
            "channel": args.channel,
        },
        "language_boost": args.language_boost,
        "subtitle_enable": args.subtitle_enable,
    }
    if resource_mode == RESOURCE_MODE_URL:
        payload["output_format"] = "url"
    return payload


async def generate_speech(client: MinimaxClient, args: TextToAudioArgs) -> SpeechResult:
    config = client.config
    response = await client.post("/v1/t2a_v2", build_speech_payload(args, config.resource_mode))

    data = response.get("data") or {}
    audio = data.get("audio")
    if not audio:
        raise MinimaxRequestError("Could not get audio data from response")
    subtitle_url = data.get("subtitle_file")

    if config.resource_mode == RESOURCE_MODE_URL:
        return SpeechResult(audio=audio, subtitle=subtitle_url)

    output_file = build_output_file(
        args.output_file or file_stem("tts", args.text),
        args.output_directory,
        config.base_path,
        args.format,
    )
    subtitle_path: str | None = None
    with OutputFiles() as outputs:
        await outputs.save(output_file, decode_hex(audio))
        if subtitle_url:
            subtitle_file = output_file.with_name(f"{output_file.stem}_subtitle.json")
            await outputs.save(subtitle_file, await client.download(subtitle_url))
            subtitle_path = str(subtitle_file)
    logger.info(f"Audio saved to {output_file}")

    return SpeechResult(audio=str(output_file), subtitle=subtitle_path)
