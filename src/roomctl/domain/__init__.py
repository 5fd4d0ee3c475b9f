"""Domain layer — posts, room directories, and validation rules.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""

from roomctl.domain.directory import Directory
from roomctl.domain.errors import ValidationError
from roomctl.domain.post import Post

__all__ = ["Directory", "Post", "ValidationError"]
