"""Router modules exposed for convenient imports."""

from . import healthz, products, readyz

__all__ = [
    "healthz",
    "products",
    "readyz",
]
