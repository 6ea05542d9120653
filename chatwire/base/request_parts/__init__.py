"""Request descriptor parts; import from ``chatwire.base.request``."""

from .descriptor import RequestDescriptor
from .builder import RequestBuilder

__all__ = ["RequestDescriptor", "RequestBuilder"]
