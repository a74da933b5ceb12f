"""Shared application constants.

Layout of the trend strip rendered next to every day of the month.
"""

# Number of slots in a day's trend strip
TREND_SLOT_COUNT = 9

# Slot holding the monthly target marker (always rendered)
TARGET_SLOT_INDEX = 4

# Slot a day lands in when its weight equals the month's initial weight
REFERENCE_SLOT_INDEX = 5

# Weight used as the reference when no day of the month has one yet
DEFAULT_INITIAL_WEIGHT = 0
