"""One-shot cue played when a rest interval ends."""

from __future__ import annotations

import sys
from typing import Callable


CueCallback = Callable[[], None]


def silent_cue() -> None:
    return None


def terminal_bell() -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()
