from .meta import EntityRef, EntityType, MetaUpdateRequest, MetaUpdateResponse
from .token import Token

# Define the public API of this module
__all__ = [
    "EntityRef",
    "EntityType",
    "MetaUpdateRequest",
    "MetaUpdateResponse",
    "Token",
]
