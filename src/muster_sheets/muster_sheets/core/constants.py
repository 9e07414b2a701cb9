"""Constants and defaults.

Note: the receipt salt is part of the receipt format. Every stored
attendance hash was derived with it, so a new value needs a new version
name (RECEIPT_SALT_V2, ...) and RECEIPT_SALT pointed at it.
"""

RECEIPT_SALT_V1 = "muster-sheets-attendance-2024"
RECEIPT_SALT = RECEIPT_SALT_V1

HASH_LENGTH = 64
SHORT_HASH_LENGTH = 16
DISPLAY_GROUP_SIZE = 8

DEFAULT_RESULTS_LIMIT = 1000
