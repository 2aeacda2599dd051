from . import books, cascade_intents

__all__ = ["books", "cascade_intents"]
