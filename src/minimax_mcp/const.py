"""Defaults, environment variable names and user-facing messages."""

SERVER_NAME = "minimax-mcp"

# Environment variables
ENV_MINIMAX_API_KEY = "MINIMAX_API_KEY"
ENV_MINIMAX_API_HOST = "MINIMAX_API_HOST"
ENV_MINIMAX_MCP_BASE_PATH = "MINIMAX_MCP_BASE_PATH"
ENV_RESOURCE_MODE = "MINIMAX_API_RESOURCE_MODE"
ENV_CONFIG_PATH = "MINIMAX_CONFIG_PATH"

DEFAULT_CONFIG_PATH = "./minimax-config.json"

# Resource modes
RESOURCE_MODE_URL = "url"
RESOURCE_MODE_LOCAL = "local"
RESOURCE_MODES = (RESOURCE_MODE_URL, RESOURCE_MODE_LOCAL)

# Transport modes
TRANSPORT_MODE_STDIO = "stdio"
TRANSPORT_MODE_REST = "rest"
TRANSPORT_MODES = (TRANSPORT_MODE_STDIO, TRANSPORT_MODE_REST)

DEFAULT_API_HOST = "https://api.minimax.chat"
DEFAULT_SERVER_PORT = 3000
DEFAULT_SERVER_ENDPOINT = "/rest"

# Dispatch
MAX_RETRY_ATTEMPTS = 3
RETRY_BASE_DELAY = 1.0

# Speech
DEFAULT_VOICE_ID = "male-qn-qingse"
DEFAULT_SPEECH_MODEL = "speech-02-hd"
DEFAULT_SPEED = 1.0
DEFAULT_VOLUME = 1.0
DEFAULT_PITCH = 0
DEFAULT_EMOTION = "happy"
DEFAULT_FORMAT = "mp3"
DEFAULT_SAMPLE_RATE = 32000
DEFAULT_BITRATE = 128000
DEFAULT_CHANNEL = 1
DEFAULT_LANGUAGE_BOOST = "auto"

# Image / video / music
DEFAULT_T2I_MODEL = "image-01"
DEFAULT_VIDEO_MODEL = "T2V-01"
DEFAULT_I2V_MODEL = "I2V-01"
DEFAULT_MUSIC_MODEL = "music-1.5"
DEFAULT_VOICE_CLONE_MODEL = "speech-02-hd"

VIDEO_POLL_INTERVAL = 20.0
VIDEO_POLL_TIMEOUT = 600.0

# Messages
ERROR_API_KEY_REQUIRED = "API_KEY environment variable is required"
ERROR_API_HOST_REQUIRED = "API_HOST environment variable is required"

VERIFICATION_URL = "https://platform.minimaxi.com/user-center/basic-information"

OUTPUT_DIRECTORY_DESCRIPTION = (
    "The directory to save the output file. `outputDirectory` is relative to "
    "`MINIMAX_MCP_BASE_PATH` (or `basePath` in config). The final save path is "
    "`${basePath}/${outputDirectory}`. If not provided, the file is saved to the desktop."
)

COST_NOTICE = (
    "\n\nNote: This tool calls MiniMax API and may incur costs. "
    "Use only when explicitly requested by the user."
)
