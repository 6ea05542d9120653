"""HTTP utilities: the executor's locked client snapshot holder."""

from .client import ClientHolder, ClientSnapshot, close_all_clients

__all__ = ["ClientHolder", "ClientSnapshot", "close_all_clients"]
