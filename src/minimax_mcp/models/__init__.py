from .config import (
    Config,
    ConfigFragment,
    ServerFragment,
    ServerOptions,
    TransportMode,
)
from .tool_args import (
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
from .tool_result import ErrorType, ToolResult

__all__ = [
    "Config",
    "ConfigFragment",
    "ServerFragment",
    "ServerOptions",
    "TransportMode",
    "ToolArgs",
    "TextToAudioArgs",
    "ListVoicesArgs",
    "PlayAudioArgs",
    "VoiceCloneArgs",
    "TextToImageArgs",
    "GenerateVideoArgs",
    "ImageToVideoArgs",
    "QueryVideoArgs",
    "MusicGenerationArgs",
    "VoiceDesignArgs",
    "ErrorType",
    "ToolResult",
]
