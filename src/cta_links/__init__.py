# CTA Links Module
# Attribution-tracked booking links (UTM decoration, booking URL switching)

from .builder import build_cta_href, is_http_url, is_mailto_url, with_mailto_params, with_tracking_params
from .manager import BOOKING_LINK_SELECTOR, BookingLinkManager
from .models import LinkClick, TrackedLink, UTMParams

__all__ = [
    "BOOKING_LINK_SELECTOR",
    "BookingLinkManager",
    "LinkClick",
    "TrackedLink",
    "UTMParams",
    "build_cta_href",
    "is_http_url",
    "is_mailto_url",
    "with_mailto_params",
    "with_tracking_params",
]
