"""Domain validation utilities."""

from .email import EmailValidator
from .selection import Confirmation, EnumValues, ValidatedRange

__all__ = ['EmailValidator', 'Confirmation', 'EnumValues', 'ValidatedRange']
