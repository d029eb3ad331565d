from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody else holds alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"              # payload: col, row
EVENT_GEM_SELECTED = "gem_selected"          # payload: col, row, gem_id
EVENT_GEM_DESELECTED = "gem_deselected"      # payload: reason=str, prev_col, prev_row


# ============================================================================
# SWAPS
# ============================================================================
EVENT_SWAP_REQUEST = "swap_request"          # payload: src=(c,r), dst=(c,r), board=world name
EVENT_SWAP_COMMITTED = "swap_committed"      # payload: src, dst, outcome=SwapOutcome
EVENT_SWAP_REJECTED = "swap_rejected"        # payload: src, dst, outcome=SwapOutcome, reason=str


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_BOARD_READY = "board_ready"                  # payload: width, height, gem_types=list[GemType]
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(c,r),...], size=int, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(c,r),...], types=[(c,r,GemType),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GemMove], columns=list[int]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: spawns=list[GemSpawn]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, delta=RoundDelta
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
