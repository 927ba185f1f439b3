"""Camera module for primary ray generation.

Components:
    thin_lens: Perspective camera with look-at placement and defocus blur
"""

from .thin_lens import Camera

__all__ = ["Camera"]
