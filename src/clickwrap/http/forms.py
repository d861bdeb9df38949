"""Bounded form parsing — URL-encoded and multipart.

``parse_bounded_form()`` enforces a ``FormLimits`` budget while it parses:
how many fields and parts may appear, and how long a field name or value
may be. Structural violations (too many fields or parts, a file upload,
an unparseable body or content type) raise a single ``MalformedForm``.
Over-long names and values are cut at the limit and flagged as
``truncated`` rather than rejected, so callers can treat them as a
normal mismatch.

URL-encoded bodies use stdlib ``urllib.parse``; multipart bodies use
``python-multipart``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qsl

from python_multipart.exceptions import FormParserError
from python_multipart.multipart import MultipartParser, parse_options_header

from clickwrap.errors import MalformedForm


@dataclass(frozen=True, slots=True)
class FormLimits:
    """Structural limits applied while a form body is parsed."""

    fields: int = 1
    parts: int = 1
    field_name_size: int = 100
    field_size: int = 1024


@dataclass(frozen=True, slots=True)
class FormField:
    """A single parsed form field.

    ``truncated`` is True when either the name or the value was cut at
    the configured limit.
    """

    name: str
    value: str
    truncated: bool = False


class FormData(Mapping[str, FormField]):
    """Immutable parsed form data, keyed by (possibly truncated) field name."""

    __slots__ = ("_fields",)

    def __init__(self, fields: tuple[FormField, ...] = ()) -> None:
        object.__setattr__(self, "_fields", fields)

    def __getitem__(self, key: str) -> FormField:
        for f in self._fields:
            if f.name == key:
                return f
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return (f.name for f in self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FormData({list(self._fields)!r})"


def parse_bounded_form(body: bytes, content_type: str | None, limits: FormLimits) -> FormData:
    """Parse a form body under *limits*.

    Supports ``application/x-www-form-urlencoded`` and
    ``multipart/form-data``. Anything else, including a missing
    Content-Type, is a ``MalformedForm``.
    """
    if not content_type:
        raise MalformedForm("Missing Content-Type")

    media_type = content_type.lower().split(";")[0].strip()
    if media_type == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body, limits)
    if media_type == "multipart/form-data":
        return _parse_multipart(body, content_type, limits)
    raise MalformedForm(f"Unsupported form content type: {content_type!r}")


def _bounded_field(name: str, value: str, limits: FormLimits) -> FormField:
    truncated = len(name) > limits.field_name_size or len(value) > limits.field_size
    return FormField(
        name=name[: limits.field_name_size],
        value=value[: limits.field_size],
        truncated=truncated,
    )


def _parse_urlencoded(body: bytes, limits: FormLimits) -> FormData:
    try:
        text = body.decode("utf-8")
        # A urlencoded body is one part, so the field budget is the tighter of the two.
        pairs = parse_qsl(
            text,
            keep_blank_values=True,
            strict_parsing=bool(text),
            max_num_fields=min(limits.fields, limits.parts),
        )
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedForm(f"Unparseable urlencoded body: {exc}") from exc
    return FormData(tuple(_bounded_field(name, value, limits) for name, value in pairs))


def _parse_multipart(body: bytes, content_type: str, limits: FormLimits) -> FormData:
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if not boundary:
        raise MalformedForm("Multipart body missing boundary parameter")

    fields: list[FormField] = []
    parts = 0
    header_name = ""
    field_name: str | None = None
    is_file = False
    value = bytearray()
    overflow = False

    def on_part_begin() -> None:
        nonlocal parts, field_name, is_file, value, overflow
        parts += 1
        if parts > limits.parts:
            raise MalformedForm(f"More than {limits.parts} part(s)")
        field_name = None
        is_file = False
        value = bytearray()
        overflow = False

    def on_header_field(data: bytes, start: int, end: int) -> None:
        nonlocal header_name
        header_name = data[start:end].decode("latin-1").lower()

    def on_header_value(data: bytes, start: int, end: int) -> None:
        nonlocal field_name, is_file
        if header_name != "content-disposition":
            return
        _, params = parse_options_header(data[start:end])
        name = params.get(b"name")
        if name is not None:
            field_name = name.decode("utf-8", errors="replace")
        if b"filename" in params:
            is_file = True

    def on_part_data(data: bytes, start: int, end: int) -> None:
        nonlocal overflow
        if overflow:
            return
        room = limits.field_size + 1 - len(value)
        chunk = data[start:end]
        value.extend(chunk[:room])
        if len(value) > limits.field_size:
            overflow = True

    def on_part_end() -> None:
        if is_file:
            raise MalformedForm("File uploads are not accepted")
        if field_name is None:
            raise MalformedForm("Multipart part without a field name")
        if len(fields) >= limits.fields:
            raise MalformedForm(f"More than {limits.fields} field(s)")
        fields.append(
            _bounded_field(field_name, value.decode("utf-8", errors="replace"), limits)
        )

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
    }

    parser = MultipartParser(boundary, callbacks)
    try:
        parser.write(body)
        parser.finalize()
    except FormParserError as exc:
        raise MalformedForm(f"Unparseable multipart body: {exc}") from exc
    return FormData(tuple(fields))
