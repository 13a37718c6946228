"""
Message Assembler - Build log messages from literal text and private values.

A Message is an immutable, ordered sequence of fragments:
    - Literal: fixed text, always emitted verbatim
    - Interpolated: a deferred producer of a value's text plus its privacy
      directive

Nothing is formatted while a message is built. Producers run only when a
RedactionEngine renders the message, and only if the value is not replaced
by the `<private>` placeholder. Values that change between construction and
rendering therefore show their state at render time.

Example:
    from logmessage import Message, value, PUBLIC, PRIVATE_HASH

    msg = Message("order ", value(order_id, PUBLIC), " paid by ", value(email, PRIVATE_HASH))
    msg = Message.format("order {} paid by {email}", value(order_id, PUBLIC), email=value(email, PRIVATE_HASH))
"""

import re
from dataclasses import dataclass
from string import Formatter
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol, Union, runtime_checkable

from .privacy import AUTO, PrivacyDirective


@dataclass(frozen=True)
class Literal:
    """Fixed text, emitted verbatim."""
    text: str


@dataclass(frozen=True)
class Interpolated:
    """A value's text, produced on demand, with its privacy directive."""
    producer: Callable[[], str]
    privacy: PrivacyDirective = AUTO


Fragment = Union[Literal, Interpolated]


@dataclass(frozen=True)
class Value:
    """
    An interpolation argument annotated with a privacy directive.

    `get` returns the underlying object; it is called at render time, not
    when the message is built. Create instances with value() or lazy().
    """
    get: Callable[[], Any]
    privacy: PrivacyDirective = AUTO


def value(obj: Any, privacy: PrivacyDirective = AUTO) -> Value:
    """Annotate `obj` with a privacy directive for interpolation."""
    return Value(lambda: obj, privacy)


def lazy(fn: Callable[[], Any], privacy: PrivacyDirective = AUTO) -> Value:
    """
    Annotate a zero-argument callable whose result is interpolated.

    Use this when computing the value itself is expensive; the callable is
    never invoked for values that end up as `<private>`.
    """
    return Value(fn, privacy)


@runtime_checkable
class LogMessageConvertible(Protocol):
    """
    Anything that knows how to describe itself as a log Message.

    Lets callers keep log wording in a few typed event objects instead of
    scattering templates across the codebase:

        @dataclass
        class LoginFailed:
            user: str

            def to_log_message(self) -> Message:
                return Message("login failed for ", value(self.user, PRIVATE_HASH))
    """

    def to_log_message(self) -> "Message":
        ...


_FIELD_PATH = re.compile(r"\.([^.\[]+)|\[([^\]]+)\]")


def _split_field_name(field_name: str) -> tuple[Union[int, str], list[tuple[bool, Union[int, str]]]]:
    """Split `a.b[0]` into ("a", [(True, "b"), (False, 0)])."""
    first_end = len(field_name)
    for i, ch in enumerate(field_name):
        if ch in ".[":
            first_end = i
            break
    first: Union[int, str] = field_name[:first_end]
    if first.isdigit():
        first = int(first)

    rest: list[tuple[bool, Union[int, str]]] = []
    pos = first_end
    while pos < len(field_name):
        match = _FIELD_PATH.match(field_name, pos)
        if match is None:
            raise ValueError(f"Invalid field name in template: {field_name!r}")
        attr, key = match.groups()
        if attr is not None:
            rest.append((True, attr))
        else:
            rest.append((False, int(key) if key.isdigit() else key))
        pos = match.end()
    return first, rest


def _convert(obj: Any, conversion: Optional[str]) -> Any:
    if conversion == "s":
        return str(obj)
    if conversion == "r":
        return repr(obj)
    if conversion == "a":
        return ascii(obj)
    return obj


def _field_producer(
    get: Callable[[], Any],
    path: list[tuple[bool, Union[int, str]]],
    conversion: Optional[str],
    format_spec: str,
) -> Callable[[], str]:
    def produce() -> str:
        obj = get()
        for is_attr, key in path:
            obj = getattr(obj, key) if is_attr else obj[key]
        return format(_convert(obj, conversion), format_spec)

    return produce


def _as_fragments(part: Any) -> list[Fragment]:
    if isinstance(part, str):
        return [Literal(part)] if part else []
    if isinstance(part, (Literal, Interpolated)):
        return [part]
    if isinstance(part, Message):
        return list(part.fragments)
    if isinstance(part, Value):
        get = part.get
        return [Interpolated(lambda: str(get()), part.privacy)]
    return [Interpolated(lambda: str(part), AUTO)]


class Message:
    """
    An immutable log message made of literal and interpolated fragments.

    Positional parts are joined in order: strings become literals, values
    wrapped with value()/lazy() keep their directive, and any other object
    is interpolated with the AUTO directive.

    Rendering is done by RedactionEngine.render(); a Message never changes
    after construction.
    """

    __slots__ = ("_fragments",)

    def __init__(self, *parts: Any):
        fragments: list[Fragment] = []
        for part in parts:
            fragments.extend(_as_fragments(part))
        self._fragments: tuple[Fragment, ...] = tuple(fragments)

    @classmethod
    def from_fragments(cls, fragments: Iterable[Fragment]) -> "Message":
        """Build a message directly from fragments, in order."""
        msg = cls()
        msg._fragments = tuple(fragments)
        return msg

    @classmethod
    def literal(cls, text: str) -> "Message":
        """A message with no interpolations."""
        return cls(text)

    @classmethod
    def format(cls, template: str, /, *args: Any, **kwargs: Any) -> "Message":
        """
        Build a message from a `str.format`-style template.

        Args:
            template: Template with `{}`, `{0}` or `{name}` replacement fields.
                      Attribute and index access (`{user.id}`, `{row[0]}`),
                      conversions (`!r`) and format specs (`:>8`) are applied
                      lazily at render time.
            *args, **kwargs: Field values. Wrap them with value() or lazy()
                      to set a privacy directive; bare values use AUTO.

        Returns:
            The assembled Message.

        Raises:
            ValueError: If the template is malformed.
            IndexError, KeyError: If a field refers to a missing argument.
        """
        fragments: list[Fragment] = []
        auto_index = 0
        numbering: Optional[str] = None

        for literal_text, field_name, format_spec, conversion in Formatter().parse(template):
            if literal_text:
                # Escaped braces split one literal span into several
                if fragments and isinstance(fragments[-1], Literal):
                    fragments[-1] = Literal(fragments[-1].text + literal_text)
                else:
                    fragments.append(Literal(literal_text))
            if field_name is None:
                continue

            if format_spec and "{" in format_spec:
                raise ValueError("Nested replacement fields are not supported in log templates")
            if conversion not in (None, "s", "r", "a"):
                raise ValueError(f"Unknown conversion specifier {conversion!r}")

            first, path = _split_field_name(field_name)
            if first == "":
                if numbering == "manual":
                    raise ValueError("cannot switch from manual field specification to automatic field numbering")
                numbering = "auto"
                first = auto_index
                auto_index += 1
            elif isinstance(first, int):
                if numbering == "auto":
                    raise ValueError("cannot switch from automatic field numbering to manual field specification")
                numbering = "manual"

            arg = args[first] if isinstance(first, int) else kwargs[first]
            if isinstance(arg, Value):
                get, privacy = arg.get, arg.privacy
            else:
                get, privacy = (lambda obj=arg: obj), AUTO

            fragments.append(
                Interpolated(_field_producer(get, path, conversion, format_spec or ""), privacy)
            )

        return cls.from_fragments(fragments)

    @property
    def fragments(self) -> tuple[Fragment, ...]:
        return self._fragments

    def to_log_message(self) -> "Message":
        return self

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._fragments)

    def __len__(self) -> int:
        return len(self._fragments)

    def __add__(self, other: Any) -> "Message":
        if isinstance(other, (Message, str)):
            return Message(self, other)
        return NotImplemented

    def __radd__(self, other: Any) -> "Message":
        if isinstance(other, str):
            return Message(other, self)
        return NotImplemented

    def __repr__(self) -> str:
        parts = []
        for fragment in self._fragments:
            if isinstance(fragment, Literal):
                parts.append(repr(fragment.text))
            else:
                parts.append(f"<{type(fragment.privacy).__name__}>")
        return f"Message({', '.join(parts)})"


class MessageBuilder:
    """
    Incrementally assemble a Message, one literal or interpolation at a time.

    Example:
        builder = MessageBuilder()
        builder.append_literal("retrying ").append_interpolation(url, PUBLIC)
        msg = builder.build()
    """

    def __init__(self) -> None:
        self._fragments: list[Fragment] = []

    def append_literal(self, text: str) -> "MessageBuilder":
        if text:
            self._fragments.append(Literal(text))
        return self

    def append_interpolation(self, obj: Any, privacy: PrivacyDirective = AUTO) -> "MessageBuilder":
        self._fragments.append(Interpolated(lambda: str(obj), privacy))
        return self

    def append_lazy(self, fn: Callable[[], Any], privacy: PrivacyDirective = AUTO) -> "MessageBuilder":
        self._fragments.append(Interpolated(lambda: str(fn()), privacy))
        return self

    def build(self) -> Message:
        return Message.from_fragments(self._fragments)


def as_message(obj: Any) -> Message:
    """
    Coerce a Message, LogMessageConvertible or plain string to a Message.

    Raises:
        TypeError: For anything else.
    """
    if isinstance(obj, Message):
        return obj
    if isinstance(obj, str):
        return Message.literal(obj)
    if isinstance(obj, LogMessageConvertible):
        return obj.to_log_message()
    raise TypeError(f"Cannot build a log message from {type(obj).__name__}")
