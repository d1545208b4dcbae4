"""UTC timestamp helpers shared by the shop models and token signing.

Usage:
    from libs.common.datetime_utils import utc_now

    date_ordered: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Timezone-aware "now" in UTC; used for column defaults and JWT ``iat``."""
    return datetime.now(timezone.utc)
