from .cascade import CascadeDispatcher, get_cascade_dispatcher

__all__ = ["CascadeDispatcher", "get_cascade_dispatcher"]
