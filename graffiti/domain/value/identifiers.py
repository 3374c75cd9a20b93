"""Strongly typed identifiers.

NewType keeps tag ids, subscription ids and caller identities from being
mixed up at call sites without any runtime cost.
"""

from typing import NewType
from uuid import UUID

TagId = NewType("TagId", UUID)
SubscriptionId = NewType("SubscriptionId", UUID)

# Opaque caller identity issued by an external auth layer
ClientId = NewType("ClientId", str)
