"""Interceptor hooks and the priority-ordered chain that runs them."""

from .priority import InterceptorPriority
from .interceptor_base import Interceptor
from .chain import InterceptorChain

__all__ = ["Interceptor", "InterceptorChain", "InterceptorPriority"]
