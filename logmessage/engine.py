"""
RedactionEngine - Render log messages according to their privacy directives.

For each interpolated fragment the engine:
1. Resolves the directive against the build mode and the force-masking flag
2. Emits the value verbatim, the `<private>` placeholder, or a salted digest

Literal fragments are always emitted verbatim. Producers are called at most
once per render and never for values replaced by the placeholder.

Thread-safe: rendering shares nothing mutable between calls.
"""

import logging
import threading
from enum import Enum
from typing import Any, Iterable, Optional

from . import config
from .digest import SeededDigest, get_default_digest
from .message import Literal, as_message
from .privacy import Auto, MaskMode, PrivacyDirective, PrivateMasked, Public

logger = logging.getLogger(__name__)

PLACEHOLDER = "<private>"


class Resolution(Enum):
    """How a single interpolated value is rendered."""
    PLAINTEXT = "plaintext"
    PLACEHOLDER = "placeholder"
    HASH = "hash"


class UnknownPrivacyDirectiveError(TypeError):
    """Raised in debug builds when a fragment carries an unrecognised directive."""


class RedactionEngine:
    """
    Engine for turning a Message into a log line.

    Example:
        engine = RedactionEngine()

        msg = Message("hello, ", value("world", PRIVATE))
        engine.render(msg)
        # "hello, <private>"

        # AUTO values are masked in release builds or when forced
        engine.render(Message("user ", user_name), force_masking=True)
        # "user <private>"
    """

    def __init__(
        self,
        is_debug_build: Optional[bool] = None,
        digest: Optional[SeededDigest] = None,
    ):
        """
        Initialize the RedactionEngine.

        Args:
            is_debug_build: Show AUTO values in plaintext unless masking is
                            forced. Defaults to config.is_debug_build().
            digest: Digest used for MaskMode.HASH. Defaults to the
                    process-wide seeded digest.
        """
        self._is_debug_build = config.is_debug_build() if is_debug_build is None else is_debug_build
        self._digest = digest

    @property
    def is_debug_build(self) -> bool:
        return self._is_debug_build

    @property
    def digest(self) -> SeededDigest:
        return self._digest if self._digest is not None else get_default_digest()

    def should_mask(self, directive: PrivacyDirective, force_masking: bool = False) -> bool:
        """Return True if a value with this directive must not appear verbatim."""
        if isinstance(directive, Public):
            return False
        if isinstance(directive, Auto):
            return force_masking or not self._is_debug_build
        if isinstance(directive, PrivateMasked):
            return True
        return self._unknown_directive(directive) is not Resolution.PLAINTEXT

    def resolve(self, directive: PrivacyDirective, force_masking: bool = False) -> Resolution:
        """
        Resolve a directive to the way its value is rendered.

        Args:
            directive: The directive attached to the interpolated value.
            force_masking: Mask AUTO values even in debug builds.

        Returns:
            PLAINTEXT, PLACEHOLDER or HASH.

        Raises:
            UnknownPrivacyDirectiveError: For an unrecognised directive in a
                debug build. Release builds fall back to PLACEHOLDER.
        """
        if isinstance(directive, (Public, Auto)):
            return Resolution.PLACEHOLDER if self.should_mask(directive, force_masking) else Resolution.PLAINTEXT
        if isinstance(directive, PrivateMasked):
            if directive.mode is MaskMode.HASH:
                return Resolution.HASH
            if directive.mode is not MaskMode.PLACEHOLDER:
                logger.warning(f"Unknown mask mode {directive.mode!r}, using placeholder")
            return Resolution.PLACEHOLDER
        return self._unknown_directive(directive)

    def _unknown_directive(self, directive: Any) -> Resolution:
        if self._is_debug_build:
            raise UnknownPrivacyDirectiveError(f"Unknown privacy directive: {directive!r}")
        logger.warning(f"Unknown privacy directive {type(directive).__name__}, masking with placeholder")
        return Resolution.PLACEHOLDER

    def render(self, message: Any, force_masking: bool = False) -> str:
        """
        Render a message to a single line of text.

        Args:
            message: A Message, a LogMessageConvertible or a plain string.
            force_masking: Mask AUTO values even in debug builds.

        Returns:
            The concatenation of all fragments, with private values masked.

        Example:
            engine.render(Message.format("hello, {}, 123, {}", value("world", PUBLIC), value(456, PUBLIC)))
            # "hello, world, 123, 456"
        """
        parts: list[str] = []

        for fragment in as_message(message):
            if isinstance(fragment, Literal):
                parts.append(fragment.text)
                continue

            resolution = self.resolve(fragment.privacy, force_masking)
            if resolution is Resolution.PLAINTEXT:
                parts.append(fragment.producer())
            elif resolution is Resolution.HASH:
                parts.append(self.digest.mask(fragment.producer()))
            else:
                parts.append(PLACEHOLDER)

        return "".join(parts)

    def render_batch(self, messages: Iterable[Any], force_masking: bool = False) -> list[str]:
        """Render several messages with the same force-masking flag."""
        return [self.render(message, force_masking) for message in messages]


# Singleton instance for convenience
_default_engine: Optional[RedactionEngine] = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> RedactionEngine:
    """
    Get the default RedactionEngine instance.

    Its build mode is read from the environment on first use.
    For more control, instantiate RedactionEngine directly.
    """
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = RedactionEngine()
                logger.debug(f"Created default redaction engine (debug build: {_default_engine.is_debug_build})")
    return _default_engine


def render(message: Any, force_masking: bool = False) -> str:
    """Render a message with the default engine."""
    return get_default_engine().render(message, force_masking)
