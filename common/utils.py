"""
Utility functions for accessing settings
"""
from django.conf import settings

from core.constants import Defaults

BOARDING_HOUSE_DEFAULTS = {
    'DEFAULT_APPROVAL_MESSAGE': Defaults.APPROVAL_MESSAGE,
    'DEFAULT_REJECTION_MESSAGE': Defaults.REJECTION_MESSAGE,
    'DEFAULT_CURRENCY': Defaults.CURRENCY,
    'DEFAULT_COUNTRY': Defaults.COUNTRY,
}


def get_boarding_setting(name):
    """Read a key from settings.BOARDING_HOUSE, falling back to the built-in default"""
    overrides = getattr(settings, 'BOARDING_HOUSE', {}) or {}
    if name in overrides:
        return overrides[name]
    return BOARDING_HOUSE_DEFAULTS[name]
