from .content import Content
from .meta import ContentMeta, TermMeta, UserMeta
from .term import Term
from .user import Role, User

__all__ = [
    "Content",
    "ContentMeta",
    "Role",
    "Term",
    "TermMeta",
    "User",
    "UserMeta",
]
