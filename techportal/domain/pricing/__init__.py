"""Cap/fan pricing list domain"""

from .router import router

__all__ = ["router"]
