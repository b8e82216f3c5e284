"""
Fixed reconciliation rules.

These are not configurable per call; changing any of them changes the
output schema seen by callers.
"""

LEFT_PREFIX = "L__"
RIGHT_PREFIX = "R__"

STATUS_COLUMNS = ("match_status", "diff_cols", "dup_key_flag")

STATUS_BOTH = "both"
STATUS_LEFT_ONLY = "left_only"
STATUS_RIGHT_ONLY = "right_only"

DUP_FLAG_SET = "1"
DUP_FLAG_CLEAR = "0"

DIFF_SEPARATOR = ","

# split: blank key cells (after trim) are grouped under this value
EMPTY_KEY_VALUE = "EMPTY"

# composite keys are joined with this before normalization
COMPOSITE_KEY_SEPARATOR = "|"
