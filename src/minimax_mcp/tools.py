"""Tool registry.

Each tool name is bound to an argument model, an adapter-backed handler and
the description of the operation used in failure messages. The dispatcher
only sees ``ToolSpec`` objects; adapters never see the registry.
"""

from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

import mcp.types

from minimax_mcp.api import image, music, tts, video, voice, voice_clone, voice_design
from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.audio import play_audio
from minimax_mcp.const import COST_NOTICE, RESOURCE_MODE_URL
from minimax_mcp.models.config import Config
from minimax_mcp.models.tool_args import (
    GenerateVideoArgs,
    ImageToVideoArgs,
    ListVoicesArgs,
    MusicGenerationArgs,
    PlayAudioArgs,
    QueryVideoArgs,
    TextToAudioArgs,
    TextToImageArgs,
    ToolArgs,
    VoiceCloneArgs,
    VoiceDesignArgs,
)

Handler = Callable[[Any, Config], Awaitable[str]]
ClientFactory = Callable[[Config], MinimaxClient]


@dataclass(frozen=True)
class ToolSpec:
    """A routable tool.

    Attributes:
        name: Tool name as published to clients.
        description: Tool description as published to clients.
        args_model: Pydantic model validating the tool's arguments.
        handler: ``async (args, config) -> str`` producing the result text.
        operation: Phrase used in failure messages ("Failed to <operation>").
        retry: Whether failures go through the retry policy.
        requires_credentials: Whether the API key and host must be present.
    """

    name: str
    description: str
    args_model: type[ToolArgs]
    handler: Handler
    operation: str
    retry: bool = True
    requires_credentials: bool = True

    def to_mcp_tool(self) -> mcp.types.Tool:
        return mcp.types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.args_model.model_json_schema(by_alias=True),
        )


class ToolRegistry:
    def __init__(self, specs: Iterable[ToolSpec] = ()):
        self._specs: dict[str, ToolSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: ToolSpec) -> None:
        if spec.name in self._specs:
            raise ValueError(f"Tool '{spec.name}' is already registered")
        self._specs[spec.name] = spec

    def get(self, name: str) -> ToolSpec | None:
        return self._specs.get(name)

    def names(self) -> list[str]:
        return list(self._specs)

    def mcp_tools(self) -> list[mcp.types.Tool]:
        return [spec.to_mcp_tool() for spec in self._specs.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[ToolSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)


def _format_video(result: video.VideoResult, url_mode: bool) -> str:
    if not result.finished:
        return (
            f"Success. Video generation task submitted: Task ID: {result.task_id}. "
            "Please use `query_video_generation` tool to check the status of the task "
            "and get the result."
        )
    if url_mode:
        return f"Success. Video URL: {result.video_url}"
    return f"Video saved: {result.video_path}"


def build_tool_specs(client_factory: ClientFactory = MinimaxClient) -> list[ToolSpec]:
    """Create the MiniMax tool set, opening one API client per invocation."""

    async def text_to_audio(args: TextToAudioArgs, config: Config) -> str:
        async with client_factory(config) as client:
            result = await tts.generate_speech(client, args)
        subtitle = f"Subtitle file saved: {result.subtitle}. " if result.subtitle else ""
        if config.resource_mode == RESOURCE_MODE_URL:
            return f"Success. Audio URL: {result.audio}. {subtitle}".rstrip()
        return f"Audio file saved: {result.audio}. {subtitle}Voice used: {args.voice_id}"

    async def list_voices(args: ListVoicesArgs, config: Config) -> str:
        async with client_factory(config) as client:
            result = await voice.list_voices(client, args)
        return (
            f"Success. System voices: {', '.join(result.system_voices)}, "
            f"Cloned voices: {', '.join(result.voice_clone_voices)}"
        )

    async def play(args: PlayAudioArgs, config: Config) -> str:
        return await play_audio(args)

    async def clone(args: VoiceCloneArgs, config: Config) -> str:
        async with client_factory(config) as client:
            result = await voice_clone.clone_voice(client, args)
        return f"Voice cloning successful: {result}"

    async def text_to_image(args: TextToImageArgs, config: Config) -> str:
        async with client_factory(config) as client:
            outputs = await image.generate_image(client, args)
        if config.resource_mode == RESOURCE_MODE_URL:
            return f"Success. Image URL(s): {', '.join(outputs)}"
        return f"Image(s) saved: {', '.join(outputs)}"

    async def generate_video(args: GenerateVideoArgs, config: Config) -> str:
        async with client_factory(config) as client:
            result = await video.generate_video(client, args)
        return _format_video(result, config.resource_mode == RESOURCE_MODE_URL)

    async def image_to_video(args: ImageToVideoArgs, config: Config) -> str:
        async with client_factory(config) as client:
            result = await video.generate_video(client, args, prefix="i2v")
        return _format_video(result, config.resource_mode == RESOURCE_MODE_URL)

    async def query_video_generation(args: QueryVideoArgs, config: Config) -> str:
        async with client_factory(config) as client:
            result = await video.query_video(client, args)
        if not result.finished:
            return f"Video generation task is still processing: Task ID: {args.task_id}."
        if config.resource_mode == RESOURCE_MODE_URL:
            return f"Success. Video URL: {result.video_url}"
        return f"Success. Video saved as: {result.video_path}"

    async def music_generation(args: MusicGenerationArgs, config: Config) -> str:
        async with client_factory(config) as client:
            output = await music.generate_music(client, args)
        if config.resource_mode == RESOURCE_MODE_URL:
            return f"Success. Music URL: {output}"
        return f"Success. Music saved as: {output}"

    async def design(args: VoiceDesignArgs, config: Config) -> str:
        async with client_factory(config) as client:
            result = await voice_design.design_voice(client, args)
        return f"Success. Voice ID: {result.voice_id}. Voice saved as: {result.output_file}"

    return [
        ToolSpec(
            name="text_to_audio",
            description=(
                "Convert text to audio with a given voice and save the output audio file to a "
                "given directory. If no directory is provided, the file will be saved to desktop. "
                "If no voice ID is provided, the default voice will be used." + COST_NOTICE
            ),
            args_model=TextToAudioArgs,
            handler=text_to_audio,
            operation="generate speech",
        ),
        ToolSpec(
            name="list_voices",
            description="List all available voices. Only supported when api_host is https://api.minimax.chat.",
            args_model=ListVoicesArgs,
            handler=list_voices,
            operation="list voices",
        ),
        ToolSpec(
            name="play_audio",
            description="Play an audio file. Supports WAV and MP3 formats. Does not support video.",
            args_model=PlayAudioArgs,
            handler=play,
            operation="play audio",
            retry=False,
            requires_credentials=False,
        ),
        ToolSpec(
            name="voice_clone",
            description=(
                "Clone a voice using the provided audio file. New voices will incur costs when "
                "first used." + COST_NOTICE
            ),
            args_model=VoiceCloneArgs,
            handler=clone,
            operation="clone voice",
        ),
        ToolSpec(
            name="text_to_image",
            description="Generate images based on text prompts." + COST_NOTICE,
            args_model=TextToImageArgs,
            handler=text_to_image,
            operation="generate image",
        ),
        ToolSpec(
            name="generate_video",
            description="Generate a video based on text prompts." + COST_NOTICE,
            args_model=GenerateVideoArgs,
            handler=generate_video,
            operation="generate video",
        ),
        ToolSpec(
            name="image_to_video",
            description="Generate a video based on an image." + COST_NOTICE,
            args_model=ImageToVideoArgs,
            handler=image_to_video,
            operation="generate video",
        ),
        ToolSpec(
            name="query_video_generation",
            description="Query the status of a video generation task.",
            args_model=QueryVideoArgs,
            handler=query_video_generation,
            operation="query video generation",
            retry=False,
        ),
        ToolSpec(
            name="music_generation",
            description=(
                "Create a music generation task using AI models. Generate music from prompt "
                "and lyrics." + COST_NOTICE
            ),
            args_model=MusicGenerationArgs,
            handler=music_generation,
            operation="generate music",
        ),
        ToolSpec(
            name="voice_design",
            description="Generate a voice based on description prompts." + COST_NOTICE,
            args_model=VoiceDesignArgs,
            handler=design,
            operation="design voice",
        ),
    ]


def default_registry(client_factory: ClientFactory = MinimaxClient) -> ToolRegistry:
    return ToolRegistry(build_tool_specs(client_factory))
