from .line import LINE, Line
from .messenger import Messenger
from .messenger_batch import MessengerBatch

__all__ = ["LINE", "Line", "Messenger", "MessengerBatch"]
