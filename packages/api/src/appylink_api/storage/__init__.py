from appylink_api.storage.base import KeyValueStorage, MemoryStorage
from appylink_api.storage.client_state import ClientState, CompareToggle

__all__ = [
    "ClientState",
    "CompareToggle",
    "KeyValueStorage",
    "MemoryStorage",
]
