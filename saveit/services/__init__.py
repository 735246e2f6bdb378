from .backend import BackendProxy, get_backend
from .summary import generate_summary, parse_summary
