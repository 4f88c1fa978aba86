from .client import MinimaxClient

__all__ = ["MinimaxClient"]
