# namereg - name registration service
# HTTP endpoints for registering names, backed by SQL or in-memory storage,
# plus an optional Redis key/value pass-through

__version__ = "2.0.0"

__all__ = ["__version__"]
