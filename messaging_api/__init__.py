"""Client libraries for the LINE Messaging API and the Messenger Platform.

Usage:
    from messaging_api import Line, LineClient

    client = LineClient("ACCESS_TOKEN")
    client.push("USER_ID", [Line.create_text("Hello!")])
"""

from .adapters import ClientRegistry, LINEClient, LineClient, MessengerClient
from .errors import LineAPIError, MessagingAPIError, MessengerAPIError
from .messages import LINE, Line, Messenger, MessengerBatch

__version__ = "0.1.0"

__all__ = [
    "ClientRegistry",
    "LINE",
    "LINEClient",
    "Line",
    "LineAPIError",
    "LineClient",
    "MessagingAPIError",
    "Messenger",
    "MessengerAPIError",
    "MessengerBatch",
    "MessengerClient",
]
