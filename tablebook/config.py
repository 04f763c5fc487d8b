"""Runtime configuration defaults for seating and debug logging."""

from __future__ import annotations

import os

TOTAL_SEATS = 20

# Check-in / check-out times are shown as local wall-clock time.
CLOCK_FORMAT = "%H:%M:%S"

# Empty string disables the debug log.
DEBUG_LOG_PATH = os.environ.get("TABLEBOOK_DEBUG_LOG", "/tmp/tablebook-debug.log")
