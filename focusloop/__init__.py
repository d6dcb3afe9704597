"""focusloop: a terminal work/break interval timer.

  - Interval Clock: one control loop racing a 1 s tick, a resize poll and a
    cancel token; cursor always restored
  - Live Renderer: gradient progress bar, time left, fixed or centered layout
  - Session Ledger: append-only record of every interval and its outcome
  - Cycle Orchestrator: WORK -> BREAK -> continue? state machine
  - Fire-and-forget desktop / terminal-bell notifications
"""

__version__ = "0.1.0"
__description__ = "Terminal work/break interval timer with live progress rendering"

from focusloop.core.clock import IntervalClock
from focusloop.core.ledger import SessionLedger
from focusloop.core.orchestrator import CycleOrchestrator
from focusloop.cli.app import app as cli

__all__ = ["CycleOrchestrator", "IntervalClock", "SessionLedger", "cli", "__version__"]
