# repository/namespaces.py
from typing import Final

# Store keys look like "pcafe:<namespace>:<task>:<field>". Changing ROOT breaks
# every key already written by running deployments.
ROOT: Final[str] = "pcafe"
SEPARATOR: Final[str] = ":"
WILDCARD: Final[str] = "*"

# Sub-field names as they appear in the last key segment.
LABEL_FIELD: Final[str] = "state"
CURRENT_FIELD: Final[str] = "current"
MAX_FIELD: Final[str] = "max"
