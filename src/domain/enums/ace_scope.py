"""Entry scopes of an ACL.

An ACL carries two structurally identical, ordered entry lists. The scope
tag selects which one an operation works on.
"""

from enum import Enum


class AceScope(str, Enum):
    """Scope of an access control entry.

    CLASS entries apply to every instance of the entity type and act as the
    fallback. OBJECT entries apply to one entity instance and override
    class entries.
    """

    CLASS = "class"
    OBJECT = "object"
