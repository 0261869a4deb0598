from __future__ import annotations

"""
filedress: dress up source files with path headers.
"""

from filedress.domain.constants import APP_VERSION as __version__

__all__ = ["__version__"]
