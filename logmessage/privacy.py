"""
Privacy Directives - How an interpolated value may appear in a log line.

Every value interpolated into a Message carries exactly one directive:
    - Public: always rendered verbatim
    - Auto: rendered verbatim in debug builds, masked in release builds or
      whenever the caller forces masking (the default for interpolations)
    - PrivateMasked: always masked, either with the `<private>` placeholder
      or with a truncated salted digest (MaskMode.HASH)

Directives are plain frozen values chosen at the call site. Use the shared
constants for brevity:
    from logmessage import Message, value, PUBLIC, PRIVATE, PRIVATE_HASH

    Message("user ", value(user_id, PRIVATE_HASH), " logged in from ", value(ip, PRIVATE))
"""

from abc import ABC
from dataclasses import dataclass
from enum import Enum


class MaskMode(Enum):
    """What a masked value is replaced with."""
    PLACEHOLDER = "placeholder"  # fixed `<private>` text
    HASH = "hash"  # `<mask.hash: '...'>` digest


class PrivacyDirective(ABC):
    """
    Base class for privacy directives.

    The RedactionEngine only understands the three variants below. Any other
    subclass is treated as unknown: it raises in debug builds and degrades
    to placeholder masking in release builds.
    """
    __slots__ = ()


@dataclass(frozen=True)
class Public(PrivacyDirective):
    """Never redacted."""


@dataclass(frozen=True)
class Auto(PrivacyDirective):
    """Redacted according to build mode and the render-time force flag."""


@dataclass(frozen=True)
class PrivateMasked(PrivacyDirective):
    """Always redacted, regardless of build mode or force flag."""
    mode: MaskMode = MaskMode.PLACEHOLDER


PUBLIC = Public()
AUTO = Auto()
PRIVATE = PrivateMasked(MaskMode.PLACEHOLDER)
PRIVATE_HASH = PrivateMasked(MaskMode.HASH)
