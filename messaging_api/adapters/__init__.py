from .line import LINEClient, LineClient
from .messenger import MessengerClient
from .registry import ClientRegistry

__all__ = ["LINEClient", "LineClient", "MessengerClient", "ClientRegistry"]
