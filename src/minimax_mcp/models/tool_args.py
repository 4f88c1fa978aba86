"""Argument models for each tool, keyed by tool name.

Arguments are validated once at the dispatch boundary. Models accept both
the camelCase names published in the tool schemas and their snake_case
equivalents (``asyncMode`` / ``async_mode``).
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from minimax_mcp.const import (
    DEFAULT_BITRATE,
    DEFAULT_CHANNEL,
    DEFAULT_EMOTION,
    DEFAULT_FORMAT,
    DEFAULT_I2V_MODEL,
    DEFAULT_LANGUAGE_BOOST,
    DEFAULT_PITCH,
    DEFAULT_SAMPLE_RATE,
    DEFAULT_SPEECH_MODEL,
    DEFAULT_SPEED,
    DEFAULT_T2I_MODEL,
    DEFAULT_VIDEO_MODEL,
    DEFAULT_VOICE_ID,
    DEFAULT_VOLUME,
    OUTPUT_DIRECTORY_DESCRIPTION,
)


class ToolArgs(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


class OutputArgs(ToolArgs):
    output_directory: str | None = Field(default=None, description=OUTPUT_DIRECTORY_DESCRIPTION)


class TextToAudioArgs(OutputArgs):
    text: str = Field(min_length=1, description="Text to convert to audio")
    voice_id: str = Field(default=DEFAULT_VOICE_ID, description='Voice ID to use, e.g. "female-shaonv"')
    model: str = Field(default=DEFAULT_SPEECH_MODEL, description="Model to use")
    speed: float = Field(default=DEFAULT_SPEED, ge=0.5, le=2.0, description="Speech speed")
    vol: float = Field(default=DEFAULT_VOLUME, gt=0, le=10.0, description="Speech volume")
    pitch: int = Field(default=DEFAULT_PITCH, ge=-12, le=12, description="Speech pitch")
    emotion: str = Field(
        default=DEFAULT_EMOTION,
        description='Speech emotion, values: ["happy", "sad", "angry", "fearful", '
        '"disgusted", "surprised", "neutral"]',
    )
    format: str = Field(default=DEFAULT_FORMAT, description='Audio format, values: ["pcm", "mp3", "flac", "wav"]')
    sample_rate: int = Field(
        default=DEFAULT_SAMPLE_RATE,
        description="Sample rate (Hz), values: [8000, 16000, 22050, 24000, 32000, 44100]",
    )
    bitrate: int = Field(
        default=DEFAULT_BITRATE,
        description="Bitrate (bps), values: [64000, 96000, 128000, 160000, 192000, 224000, 256000, 320000]",
    )
    channel: int = Field(default=DEFAULT_CHANNEL, description="Audio channels, values: [1, 2]")
    language_boost: str = Field(
        default=DEFAULT_LANGUAGE_BOOST,
        description="Enhance recognition of the given language or dialect, e.g. 'Chinese', "
        "'Chinese,Yue', 'English', 'Japanese', 'auto'",
    )
    subtitle_enable: bool = Field(
        default=False,
        description="Whether the subtitle service is enabled. The model must be "
        "'speech-01-turbo' or 'speech-01-hd'",
    )
    output_file: str | None = Field(
        default=None,
        description="Path to save the generated audio file, automatically generated if not provided",
    )


class ListVoicesArgs(ToolArgs):
    voice_type: str = Field(
        default="all",
        description='Type of voices to list, values: ["all", "system", "voice_cloning"]',
    )


class PlayAudioArgs(ToolArgs):
    input_file_path: str = Field(min_length=1, description="Path to the audio file to play")
    is_url: bool = Field(default=False, description="Whether the audio file is a URL")


class VoiceCloneArgs(OutputArgs):
    voice_id: str = Field(min_length=1, description="Voice ID to use")
    audio_file: str = Field(min_length=1, description="Path to the audio file")
    text: str | None = Field(default=None, description="Text for the demo audio")
    is_url: bool = Field(default=False, description="Whether the audio file is a URL")


class TextToImageArgs(OutputArgs):
    prompt: str = Field(min_length=1, description="Text prompt for image generation")
    model: str = Field(default=DEFAULT_T2I_MODEL, description="Model to use")
    aspect_ratio: str = Field(
        default="1:1",
        description='Image aspect ratio, values: ["1:1", "16:9", "4:3", "3:2", "2:3", "3:4", "9:16", "21:9"]',
    )
    n: int = Field(default=1, ge=1, le=9, description="Number of images to generate")
    prompt_optimizer: bool = Field(default=True, description="Whether to optimize the prompt")
    output_file: str | None = Field(
        default=None,
        description="Path to save the generated image file, automatically generated if not provided",
    )


class GenerateVideoArgs(OutputArgs):
    prompt: str = Field(min_length=1, description="Text prompt for video generation")
    model: str = Field(
        default=DEFAULT_VIDEO_MODEL,
        description='Model to use, values: ["T2V-01", "T2V-01-Director", "I2V-01", '
        '"I2V-01-Director", "I2V-01-live", "MiniMax-Hailuo-02"]',
    )
    first_frame_image: str | None = Field(default=None, description="First frame image")
    duration: int | None = Field(
        default=None,
        description='The duration of the video. The model must be "MiniMax-Hailuo-02". Values can be 6 and 10.',
    )
    resolution: str | None = Field(
        default=None,
        description='The resolution of the video. The model must be "MiniMax-Hailuo-02". '
        'Values range ["768P", "1080P"]',
    )
    output_file: str | None = Field(
        default=None,
        description="Path to save the generated video file, automatically generated if not provided",
    )
    async_mode: bool = Field(
        default=False,
        description="Whether to use async mode. If True, the task is submitted asynchronously and "
        "a task_id is returned; use `query_video_generation` to fetch the result.",
    )


class ImageToVideoArgs(GenerateVideoArgs):
    model: str = Field(
        default=DEFAULT_I2V_MODEL,
        description='Model to use, values: ["I2V-01", "I2V-01-Director", "I2V-01-live"]',
    )
    first_frame_image: str = Field(min_length=1, description="Path or URL of the first frame image")


class QueryVideoArgs(OutputArgs):
    task_id: str = Field(
        min_length=1,
        description="The Task ID to query. Should be the task_id returned by `generate_video` "
        "when `async_mode` is True.",
    )


class MusicGenerationArgs(OutputArgs):
    prompt: str = Field(
        min_length=1,
        description='Music creation inspiration describing style, mood, scene, etc. '
        'Example: "Pop music, sad, suitable for rainy nights". Character range: [10, 300]',
    )
    lyrics: str = Field(
        min_length=1,
        description="Song lyrics, one line per newline. Supports structure tags "
        "[Intro][Verse][Chorus][Bridge][Outro]. Character range: [10, 600]",
    )
    sample_rate: int | None = Field(
        default=None, description="Sample rate of generated music. Values: [16000, 24000, 32000, 44100]"
    )
    bitrate: int | None = Field(
        default=None, description="Bitrate of generated music. Values: [32000, 64000, 128000, 256000]"
    )
    format: str | None = Field(default=None, description='Format of generated music. Values: ["mp3", "wav", "pcm"]')
    channel: int | None = Field(default=None, description="Audio channels, values: [1, 2]")


class VoiceDesignArgs(OutputArgs):
    prompt: str = Field(min_length=1, description="The prompt to generate the voice from")
    preview_text: str = Field(min_length=1, description="The text to preview the voice")
    voice_id: str | None = Field(
        default=None,
        description='The id of the voice to use, e.g. "male-qn-qingse" or "audiobook_female_1"',
    )
