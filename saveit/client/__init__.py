from .api import SaveItClient, SUMMARY_FALLBACK
from .tokens import FileTokenStore, MemoryTokenStore
