"""Text-to-video and image-to-video generation.

Video generation is asynchronous on the API side: a task is submitted, its
status polled, and the finished file resolved through the files endpoint.
Polling is part of one attempt; it is not a retry.
"""

import asyncio
import base64
import mimetypes
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.const import RESOURCE_MODE_URL, VIDEO_POLL_INTERVAL, VIDEO_POLL_TIMEOUT
from minimax_mcp.errors import MinimaxRequestError, MinimaxTimeoutError
from minimax_mcp.files import build_output_file, file_stem, write_file
from minimax_mcp.logging import get_logger
from minimax_mcp.models.tool_args import GenerateVideoArgs, QueryVideoArgs

logger = get_logger("api.video")

Sleep = Callable[[float], Awaitable[None]]

STATUS_SUCCESS = "Success"
STATUS_FAIL = "Fail"


@dataclass(slots=True)
class VideoResult:
    status: str
    task_id: str
    video_url: str | None = None
    video_path: str | None = None

    @property
    def finished(self) -> bool:
        return self.status == STATUS_SUCCESS


def encode_first_frame(image: str) -> str:
    """URLs and data URLs pass through; local files become data URLs."""
    if image.startswith(("http://", "https://", "data:")):
        return image

    path = Path(image).expanduser()
    try:
        content = path.read_bytes()
    except OSError as e:
        raise MinimaxRequestError(f"Failed to read first frame image {image}: {e}") from e

    mime_type = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"


def build_video_payload(args: GenerateVideoArgs) -> dict[str, Any]:
    payload: dict[str, Any] = {"model": args.model, "prompt": args.prompt}
    if args.first_frame_image:
        payload["first_frame_image"] = encode_first_frame(args.first_frame_image)
    if args.duration is not None:
        payload["duration"] = args.duration
    if args.resolution:
        payload["resolution"] = args.resolution
    return payload


async def submit_video(client: MinimaxClient, args: GenerateVideoArgs) -> str:
    payload = await asyncio.to_thread(build_video_payload, args)
    response = await client.post("/v1/video_generation", payload)
    task_id = response.get("task_id")
    if not task_id:
        raise MinimaxRequestError("Failed to get task_id from response")
    logger.info(f"Video generation task submitted: {task_id}")
    return task_id


async def _query_status(client: MinimaxClient, task_id: str) -> dict[str, Any]:
    return await client.get("/v1/query/video_generation", params={"task_id": task_id})


async def _resolve_download_url(client: MinimaxClient, file_id: str) -> str:
    response = await client.get("/v1/files/retrieve", params={"file_id": file_id})
    url = (response.get("file") or {}).get("download_url")
    if not url:
        raise MinimaxRequestError(f"Failed to get download URL for file {file_id}")
    return url


async def _finish(
    client: MinimaxClient,
    task_id: str,
    file_id: str,
    output_name: str,
    output_directory: str | None,
) -> VideoResult:
    config = client.config
    url = await _resolve_download_url(client, file_id)
    if config.resource_mode == RESOURCE_MODE_URL:
        return VideoResult(status=STATUS_SUCCESS, task_id=task_id, video_url=url)

    output_file = build_output_file(output_name, output_directory, config.base_path, "mp4")
    await write_file(output_file, await client.download(url))
    logger.info(f"Video saved to {output_file}")
    return VideoResult(status=STATUS_SUCCESS, task_id=task_id, video_path=str(output_file))


async def generate_video(
    client: MinimaxClient,
    args: GenerateVideoArgs,
    *,
    prefix: str = "video",
    poll_interval: float = VIDEO_POLL_INTERVAL,
    timeout: float = VIDEO_POLL_TIMEOUT,
    sleep: Sleep = asyncio.sleep,
) -> VideoResult:
    task_id = await submit_video(client, args)
    if args.async_mode:
        return VideoResult(status="Submitted", task_id=task_id)

    deadline = time.monotonic() + timeout
    while True:
        response = await _query_status(client, task_id)
        status = response.get("status")
        if status == STATUS_SUCCESS:
            file_id = response.get("file_id")
            if not file_id:
                raise MinimaxRequestError(f"Missing file_id for finished task {task_id}")
            output_name = args.output_file or file_stem(prefix, args.prompt)
            return await _finish(client, task_id, file_id, output_name, args.output_directory)
        if status == STATUS_FAIL:
            raise MinimaxRequestError(f"Video generation failed for task {task_id}")
        if time.monotonic() >= deadline:
            raise MinimaxTimeoutError(f"Video generation task {task_id} did not finish within {timeout:.0f}s")

        logger.debug(f"Task {task_id} status: {status}")
        await sleep(poll_interval)


async def query_video(client: MinimaxClient, args: QueryVideoArgs) -> VideoResult:
    """Check a task once; download or resolve the video if it has finished."""
    response = await _query_status(client, args.task_id)
    status = response.get("status") or "Unknown"
    if status == STATUS_FAIL:
        raise MinimaxRequestError(f"Video generation failed for task {args.task_id}")
    if status != STATUS_SUCCESS:
        return VideoResult(status=status, task_id=args.task_id)

    file_id = response.get("file_id")
    if not file_id:
        raise MinimaxRequestError(f"Missing file_id for finished task {args.task_id}")
    return await _finish(client, args.task_id, file_id, f"video_{args.task_id}", args.output_directory)
