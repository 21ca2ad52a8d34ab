"""Parts request status report domain"""

from .router import router

__all__ = ["router"]
