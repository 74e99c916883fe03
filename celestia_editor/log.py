"""Package-wide logger for the Celestia editor core."""

from __future__ import annotations

import logging

logger = logging.getLogger("celestia_editor")
