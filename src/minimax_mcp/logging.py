import logging

from rich.console import Console
from rich.logging import RichHandler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"minimax_mcp.{name}")


def configure_logging(
    level: str | int = "INFO",
    logger: logging.Logger | None = None,
) -> None:
    if logger is None:
        logger = logging.getLogger("minimax_mcp")

    # stdout carries the stdio transport, so logs always go to stderr
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True)
    formatter = logging.Formatter("%(name)s: %(message)s")
    handler.setFormatter(formatter)

    logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on reconfiguration
    for hdlr in logger.handlers[:]:
        logger.removeHandler(hdlr)

    logger.addHandler(handler)

    # Set logging level on the protocol and HTTP libraries
    for name in ("mcp", "fastmcp", "httpx", "uvicorn"):
        logging.getLogger(name).setLevel(level)

    logger.debug("Logging Configured")


def mask_api_key(api_key: str | None) -> str:
    """Mask an API key for display, keeping the first and last four characters."""
    if not api_key:
        return "not provided"
    if len(api_key) <= 8:
        return "****"
    return f"{api_key[:4]}****{api_key[-4:]}"
