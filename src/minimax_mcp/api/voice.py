from dataclasses import dataclass, field

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.models.tool_args import ListVoicesArgs


@dataclass(slots=True)
class VoiceList:
    system_voices: list[str] = field(default_factory=list)
    voice_clone_voices: list[str] = field(default_factory=list)


def _format_voices(entries: list[dict] | None) -> list[str]:
    return [
        f"Name: {entry.get('voice_name')}, ID: {entry.get('voice_id')}"
        for entry in entries or []
    ]


async def list_voices(client: MinimaxClient, args: ListVoicesArgs) -> VoiceList:
    response = await client.post("/v1/get_voice", {"voice_type": args.voice_type})
    return VoiceList(
        system_voices=_format_voices(response.get("system_voice")),
        voice_clone_voices=_format_voices(response.get("voice_cloning")),
    )
