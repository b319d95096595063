"""Equipment inventory service and client."""

__all__ = []
