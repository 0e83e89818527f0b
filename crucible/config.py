from __future__ import annotations

import os

# ---- Tunables (overridable via environment variables) -----------------------
LOG_LEVEL = os.getenv("CRUCIBLE_LOG_LEVEL", "WARNING").upper()
MAX_VISITED = int(os.getenv("CRUCIBLE_MAX_VISITED", "50000"))     # cap on visited cells returned
DEFAULT_MIN_RUN = int(os.getenv("CRUCIBLE_DEFAULT_MIN_RUN", "1"))  # straight cells required before a turn
DEFAULT_MAX_RUN = int(os.getenv("CRUCIBLE_DEFAULT_MAX_RUN", "3"))  # straight cells allowed before a turn
