from .configuration import EndoDcmSettings

__all__ = ["EndoDcmSettings"]
