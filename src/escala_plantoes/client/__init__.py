from .api import ApiError, EscalaClient
from .cache import EntityCache

__all__ = ["ApiError", "EscalaClient", "EntityCache"]
