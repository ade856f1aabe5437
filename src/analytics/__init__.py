# Analytics Module
# Page view / click events and viewport-triggered tracking

from .gateway import AnalyticsGateway
from .models import AnalyticsState, IntersectionEntry, SeenSet, Transport
from .tracker import VisibilityTracker
from .viewport import ScrollThrottle, StickyCtaVisibility, Viewport

__all__ = [
    "AnalyticsGateway",
    "AnalyticsState",
    "IntersectionEntry",
    "ScrollThrottle",
    "SeenSet",
    "StickyCtaVisibility",
    "Transport",
    "Viewport",
    "VisibilityTracker",
]
