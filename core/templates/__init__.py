# =============================================================================
# core/templates/ - Outbound Message Templates
# =============================================================================

from .welcome_email import WELCOME_EMAIL_SUBJECT, welcome_email_html

__all__ = [
    "WELCOME_EMAIL_SUBJECT",
    "welcome_email_html",
]
