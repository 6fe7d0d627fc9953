from .registration import registration

__all__ = ["registration"]
