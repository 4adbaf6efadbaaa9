"""Session module for pyagenda.

Drives the request/response cycle over a conversation log.
"""

from .controller import DebugCallback, RequestController, RequestState

__all__ = ["DebugCallback", "RequestController", "RequestState"]
