"""Shared type definitions for type checking.

Uses NewType for IDs to provide compile-time type safety - prevents mixing
a subscriber id with a publication number.

Uses TypeAlias for complex types that are purely structural.
"""

from typing import Any, NewType, TypeAlias

# ID types using NewType for type safety
PublicationNumber = NewType("PublicationNumber", int)
SubscriberID = NewType("SubscriberID", str)

# Structural aliases using TypeAlias
TermList: TypeAlias = list[str]
MatchedFields: TypeAlias = list[str]
RawRecord: TypeAlias = dict[str, Any]
