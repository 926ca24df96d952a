"""Terminal presentation layer for the real-estate analysis chat."""

from .interface import RealEstateChatCLI
from .main import main

__all__ = ["RealEstateChatCLI", "main"]
