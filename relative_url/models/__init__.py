from .options import ClassificationOptions

__all__ = [
    "ClassificationOptions",
]
