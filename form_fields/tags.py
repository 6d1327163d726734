"""Parsing helpers for the ``form`` annotation attached to dataclass fields.

Each dataclass field may carry a small annotation string in its
``metadata`` under the ``"form"`` key. The string is a ``;`` separated list
of ``key=value`` pairs such as ``"label=Full Name;id=name"``. A lone ``-``
marks the field as ignored so it never appears in a generated form.

Example
-------
>>> from dataclasses import dataclass
>>> from form_fields.tags import form_field, parse_tags
>>> @dataclass
... class Signup:
...     email: str = form_field("type=email;label=Email Address", default="")
>>> parse_tags("type=email;label=Email Address")
({'type': 'email', 'label': 'Email Address'}, False)
>>> parse_tags("-")
(None, True)

Annotations are written by developers, not end users, so malformed
segments are skipped rather than reported.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Optional, Tuple

__all__ = [
    "TAG_KEY",
    "INLINE_KEY",
    "IGNORE_MARKER",
    "parse_tags",
    "tags_for",
    "is_inline",
    "form_field",
    "inline_field",
]

# Metadata key holding the annotation string of a dataclass field.
TAG_KEY = "form"

# Metadata key marking a nested dataclass field as embedded. The fields of an
# embedded record are emitted as if they were declared on the parent.
INLINE_KEY = "form_inline"

IGNORE_MARKER = "-"


def parse_tags(tags: str) -> Tuple[Optional[Dict[str, str]], bool]:
    """Split an annotation string into a key/value mapping.

    Parameters
    ----------
    tags:
        Raw annotation such as ``"type=password;footer=Keep it secret"``.

    Returns
    -------
    tuple
        ``(mapping, ignored)``. ``ignored`` is ``True`` when a bare ``-``
        segment is present, in which case ``mapping`` is ``None``. Otherwise
        ``mapping`` holds every ``key=value`` pair with surrounding whitespace
        removed. Later duplicates replace earlier ones.
    """

    tags = tags.strip()
    if not tags:
        return {}, False

    parsed: Dict[str, str] = {}
    for segment in tags.split(";"):
        # Only the first ``=`` separates key and value so footers and labels
        # may themselves contain ``=`` characters.
        key, sep, value = segment.partition("=")
        if not sep:
            if key.strip() == IGNORE_MARKER:
                return None, True
            continue
        parsed[key.strip()] = value.strip()
    return parsed, False


def tags_for(field: dataclasses.Field) -> str:
    """Return the annotation string stored on ``field`` or ``""``."""

    return field.metadata.get(TAG_KEY, "") or ""


def is_inline(field: dataclasses.Field) -> bool:
    """Return ``True`` when ``field`` was declared with :func:`inline_field`."""

    return bool(field.metadata.get(INLINE_KEY, False))


def _merge_metadata(kwargs: Dict[str, Any], extra: Dict[str, Any]) -> None:
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata.update(extra)
    kwargs["metadata"] = metadata


def form_field(tags: str = "", **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a ``form`` annotation.

    This is a thin wrapper around :func:`dataclasses.field`; every keyword
    argument (``default``, ``default_factory``, ``metadata`` ...) is passed
    through unchanged, with ``tags`` stored under :data:`TAG_KEY`.
    """

    _merge_metadata(kwargs, {TAG_KEY: tags})
    return dataclasses.field(**kwargs)


def inline_field(**kwargs: Any) -> Any:
    """Declare a nested dataclass field whose fields are inlined.

    Python has no anonymous struct members, so embedding is requested
    explicitly. The embedded record contributes its fields to the enclosing
    path instead of adding its own name as a prefix.
    """

    _merge_metadata(kwargs, {INLINE_KEY: True})
    return dataclasses.field(**kwargs)
