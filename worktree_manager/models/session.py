"""Interactive session state model."""
from enum import Enum


class SessionState(Enum):
    """States of the interactive session."""
    LISTING = "listing"
    CONFIRMING_DELETE = "confirming_delete"
    CREATING_NEW = "creating_new"
    EXITED = "exited"
