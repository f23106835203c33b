from .account import AccountRepository
from .adopter import AdopterRepository
from .base import BaseRepository
from .breeder import BreederRepository

__all__ = [
    "AccountRepository",
    "AdopterRepository",
    "BaseRepository",
    "BreederRepository",
]
