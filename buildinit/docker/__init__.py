from .reference import ImageReference, parse_reference

__all__ = ["ImageReference", "parse_reference"]
