# Export all recommendation models for easy imports
from .base import Base
from .grade import Grade
from .wish import Wish

__all__ = [
    "Base",
    "Grade",
    "Wish",
]
