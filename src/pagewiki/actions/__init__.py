"""Action handler mixins for WikiApp."""

from .navigation_actions import NavigationActionsMixin
from .page_actions import PageActionsMixin

__all__ = [
    "NavigationActionsMixin",
    "PageActionsMixin",
]
