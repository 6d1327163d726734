"""Flatten a dataclass into an ordered list of form field descriptors.

:func:`fields` is where nearly all of the real work happens. It walks the
visible fields of a dataclass in declaration order and produces one
:class:`~form_fields.field.Field` per leaf value. Nested dataclasses are
walked recursively and their fields are named with a dotted path
(``Address.Street1``); embedded dataclasses declared with
:func:`~form_fields.tags.inline_field` contribute their fields without a
prefix.

Example
-------
>>> from dataclasses import dataclass, field
>>> from form_fields import fields, form_field
>>> @dataclass
... class Address:
...     Street1: str = form_field("label=Street", default="")
>>> @dataclass
... class Customer:
...     Name: str = ""
...     Home: Address = field(default_factory=Address)
>>> [f.name for f in fields(Customer)]
['Name', 'Home.Street1']

Algorithm
---------
For every visible field ``c`` of the record::

    value = c.value or zero_value(element_type(c.type))   # only when None
    if value is a dataclass:
        extend with fields(value, *names)           # inline
        extend with fields(value, *names, c.name)   # named
    else:
        tags, ignored = parse_tags(c.tags)
        if not ignored:
            emit Field.default(names + c.name, value) with tags applied

Inside an embedded record, a field whose name is already declared by an
enclosing level is skipped: the outer field wins.

The function is pure: it holds no state and only reads from its input.
Recursive dataclass types (a field referring back to its own class) would
recurse forever because ``None`` is replaced with a fresh zero instance at
each step, so a depth guard raises :class:`FormDepthError` instead.
"""

from __future__ import annotations

import logging
from typing import Any, FrozenSet, List, Sequence

from .field import Field
from .tags import parse_tags
from .values import (
    FormDepthError,
    element_type,
    is_record,
    record_components,
    value_of,
    zero_value,
)

__all__ = ["fields", "FormDepthError", "DEFAULT_MAX_DEPTH"]

logger = logging.getLogger(__name__)

# Nesting limit for records. Real forms rarely nest more than a handful of
# levels; hitting this almost always means a self-referential type.
DEFAULT_MAX_DEPTH = 64


def fields(v: Any, *names: str, max_depth: int = DEFAULT_MAX_DEPTH) -> List[Field]:
    """Return form field descriptors for every leaf of ``v``.

    Parameters
    ----------
    v:
        A dataclass instance, a dataclass type (rendered from its zero
        value) or a ``weakref.ref`` to an instance.
    *names:
        Declared names of the enclosing records. Callers normally omit this;
        it is used when recursing into nested dataclasses.
    max_depth:
        Maximum number of nested records to descend into.

    Returns
    -------
    list of Field
        Descriptors in depth-first declaration order.

    Raises
    ------
    NotARecordError
        If ``v`` is not a dataclass instance or type.
    FormDepthError
        If the records nest more than ``max_depth`` levels deep, or a
        required field refers back to its own dataclass.
    """

    return _flatten(v, tuple(names), 0, max_depth, frozenset())


def _flatten(
    v: Any,
    names: Sequence[str],
    depth: int,
    max_depth: int,
    shadowed: FrozenSet[str],
) -> List[Field]:
    if depth > max_depth:
        path = ".".join(names) or "<root>"
        logger.error("Form nesting exceeded %d levels at %s", max_depth, path)
        raise FormDepthError(
            f"records nest deeper than {max_depth} levels at {path}; "
            "is the dataclass self-referential?"
        )

    record = value_of(v)
    components = list(record_components(record))
    # Names declared at this level hide same-named fields of embedded
    # records, just as an outer field hides a promoted one.
    declared = shadowed | {c.name for c in components}

    ret: List[Field] = []
    for component in components:
        if component.name in shadowed:
            logger.debug(
                "Skipping embedded field %s shadowed by an outer field",
                ".".join((*names, component.name)),
            )
            continue

        value = component.value
        # A missing optional value still has a declared type, so render the
        # zero value of that type instead.
        if value is None:
            if isinstance(component.type, str):
                logger.warning(
                    "Field %s is None and its type %r is unresolved; emitting it as a leaf",
                    ".".join((*names, component.name)),
                    component.type,
                )
            value = zero_value(element_type(component.type))

        # Nested records add their own leaves. Embedded records keep the
        # current prefix so their fields appear as if declared here.
        if is_record(value):
            if component.inline:
                ret.extend(_flatten(value, tuple(names), depth + 1, max_depth, declared))
            else:
                ret.extend(_flatten(value, (*names, component.name), depth + 1, max_depth, frozenset()))
            continue

        tags, ignored = parse_tags(component.tags)
        if ignored:
            logger.debug("Skipping ignored field %s", ".".join((*names, component.name)))
            continue
        field = Field.default((*names, component.name), value)
        field.apply_tags(tags)
        ret.append(field)
    return ret
