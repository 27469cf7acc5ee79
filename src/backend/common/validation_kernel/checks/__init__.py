from .field_required import FIELD_REQUIRED
from .field_min_length import FIELD_MIN_LENGTH
from .field_max_length import FIELD_MAX_LENGTH
from .field_email import FIELD_EMAIL
from .field_phone import FIELD_PHONE
from .field_range import FIELD_RANGE
from .field_positive import FIELD_POSITIVE
from .field_custom import FIELD_CUSTOM

__all__ = [
    "FIELD_REQUIRED",
    "FIELD_MIN_LENGTH",
    "FIELD_MAX_LENGTH",
    "FIELD_EMAIL",
    "FIELD_PHONE",
    "FIELD_RANGE",
    "FIELD_POSITIVE",
    "FIELD_CUSTOM",
]
