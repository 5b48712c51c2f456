"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MAX_NOTE_LENGTH = 255
MINUTES_PER_HOUR = 60
MONEY_QUANTUM = "0.01"
