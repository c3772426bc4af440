# Models - queue item payloads returned by Jenkins
from .queue import Executable, QueueItem

__all__ = ["Executable", "QueueItem"]
