from .transcriptions import cancel_attempts
from .transcriptions import router as transcriptions_router

__all__ = ["cancel_attempts", "transcriptions_router"]
