"""Contact domain - contact form and newsletter subscriptions"""

from .router import router

__all__ = ["router"]
