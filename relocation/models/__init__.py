# Export all relocation models for easy imports
from .base import Base
from .country import RecCountry

__all__ = [
    "Base",
    "RecCountry",
]
