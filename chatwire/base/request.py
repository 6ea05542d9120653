"""Request descriptor public surface."""

from .request_parts.descriptor import RequestDescriptor
from .request_parts.builder import RequestBuilder

__all__ = ["RequestDescriptor", "RequestBuilder"]
