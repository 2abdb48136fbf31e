"""API routes package"""

from . import auth, meals, poops, health

__all__ = ["auth", "meals", "poops", "health"]
