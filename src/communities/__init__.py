"""Community module.

Provides support-topic communities with:
- Creation (creator joins automatically)
- Join/leave toggling with member counts
- Display labels for feed posts

Note: Service and router are not exported here to avoid circular imports
(profiles in src.auth.models use Condition, and the service uses Viewer).
Import directly from src.communities.service / src.communities.router.
"""

from .models import Community, Condition, make_community


__all__ = [
    "Community",
    "Condition",
    "make_community",
]
