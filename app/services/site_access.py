import hmac
import logging

from app.utils.validators import strip_direction_marks

logger = logging.getLogger(__name__)


class SiteAccessNotConfigured(Exception):
    pass


def verify_site_password(candidate: str, expected: str) -> bool:
    if not expected:
        logger.error("SITE_ACCESS_PASSWORD not configured")
        raise SiteAccessNotConfigured()

    clean_input = strip_direction_marks(candidate)
    clean_valid = strip_direction_marks(expected)
    granted = hmac.compare_digest(clean_input.encode("utf-8"), clean_valid.encode("utf-8"))
    logger.info("Site access %s", "granted" if granted else "denied")
    return granted
