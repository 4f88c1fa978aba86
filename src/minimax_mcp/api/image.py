from typing import Any

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.const import RESOURCE_MODE_URL
from minimax_mcp.errors import MinimaxRequestError
from minimax_mcp.files import OutputFiles, build_output_file, file_stem
from minimax_mcp.logging import get_logger
from minimax_mcp.models.tool_args import TextToImageArgs

logger = get_logger("api.image")


async def generate_image(client: MinimaxClient, args: TextToImageArgs) -> list[str]:
    """Generate images and return their URLs or saved paths."""
    config = client.config
    payload: dict[str, Any] = {
        "model": args.model,
        "prompt": args.prompt,
        "aspect_ratio": args.aspect_ratio,
        "n": args.n,
        "prompt_optimizer": args.prompt_optimizer,
    }
    response = await client.post("/v1/image_generation", payload)

    image_urls = (response.get("data") or {}).get("image_urls") or []
    if not image_urls:
        raise MinimaxRequestError("No images generated")

    if config.resource_mode == RESOURCE_MODE_URL:
        return list(image_urls)

    stem = args.output_file or file_stem("image", args.prompt)
    saved: list[str] = []
    with OutputFiles() as outputs:
        for index, url in enumerate(image_urls):
            name = stem if len(image_urls) == 1 else f"{stem}_{index}"
            output_file = build_output_file(name, args.output_directory, config.base_path, "jpg")
            await outputs.save(output_file, await client.download(url))
            saved.append(str(output_file))

    logger.info(f"Saved {len(saved)} image(s)")
    return saved
