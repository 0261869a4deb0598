from __future__ import annotations

from filedress.domain.constants import APP_VERSION

USER_AGENT = f"filedress-update-checker/{APP_VERSION}"
DEFAULT_TIMEOUT = 3
