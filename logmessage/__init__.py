"""
logmessage - Privacy-aware structured log messages

Build a log line from literal text and interpolated values, where every value
says how much of it may reach the logs: all of it, none of it, or a salted
digest that lets you correlate entries within one run.

Architecture:
    - Message: immutable sequence of literal and interpolated fragments
    - privacy: PUBLIC, AUTO (default), PRIVATE and PRIVATE_HASH directives
    - RedactionEngine: resolves directives and renders a Message to text
    - SeededDigest: per-process salted, truncated SHA-256 for hashed values

Example:
    from logmessage import Message, render, value, PUBLIC, PRIVATE_HASH

    msg = Message.format("charge {} for {}", value(amount, PUBLIC), value(email, PRIVATE_HASH))
    render(msg)
    # "charge 12.50 for <mask.hash: 'Hx4u9oN6wP0Yq0nqK0lJ0g=='>"
"""

from .digest import SeededDigest, get_default_digest
from .engine import (
    PLACEHOLDER,
    RedactionEngine,
    Resolution,
    UnknownPrivacyDirectiveError,
    get_default_engine,
    render,
)
from .message import (
    Interpolated,
    Literal,
    LogMessageConvertible,
    Message,
    MessageBuilder,
    Value,
    as_message,
    lazy,
    value,
)
from .privacy import (
    AUTO,
    PRIVATE,
    PRIVATE_HASH,
    PUBLIC,
    Auto,
    MaskMode,
    PrivacyDirective,
    PrivateMasked,
    Public,
)

__all__ = [
    "Message",
    "MessageBuilder",
    "Literal",
    "Interpolated",
    "Value",
    "LogMessageConvertible",
    "as_message",
    "value",
    "lazy",
    "PrivacyDirective",
    "Public",
    "Auto",
    "PrivateMasked",
    "MaskMode",
    "PUBLIC",
    "AUTO",
    "PRIVATE",
    "PRIVATE_HASH",
    "RedactionEngine",
    "Resolution",
    "UnknownPrivacyDirectiveError",
    "PLACEHOLDER",
    "get_default_engine",
    "render",
    "SeededDigest",
    "get_default_digest",
]
