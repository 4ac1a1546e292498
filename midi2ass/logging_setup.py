from __future__ import annotations

import logging
import os
import sys


def setup_logging(debug: bool, quiet: bool = False) -> None:
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    level_name = os.getenv("MIDI2ASS_LOG_LEVEL")
    if level_name:
        try:
            level = getattr(logging, level_name.upper())
        except AttributeError:
            pass

    # stdout may carry the subtitle file
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
