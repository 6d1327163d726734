"""Normalize arbitrary input values into dataclass records.

Callers frequently want to render an empty form for a type without having an
instance at hand. :func:`value_of` therefore accepts either a dataclass
instance or the dataclass itself; a class is treated like a "null handle"
whose type is known and replaced with its zero value. ``weakref.ref``
handles are dereferenced so cached objects can be passed directly.

Example
-------
>>> from dataclasses import dataclass
>>> from form_fields.values import value_of, zero_value
>>> @dataclass
... class Address:
...     street1: str
...     zip: int
>>> value_of(Address)
Address(street1='', zip=0)
>>> zero_value(int)
0

The module also exposes :func:`record_components` which builds the transient
"record view" iterated by the flattener.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import sys
import types
import weakref
from typing import (
    Annotated,
    Any,
    Dict,
    Iterator,
    Literal,
    NamedTuple,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from .tags import is_inline, tags_for

__all__ = [
    "NotARecordError",
    "FormDepthError",
    "Component",
    "value_of",
    "zero_value",
    "element_type",
    "component_types",
    "record_components",
    "is_record",
]

logger = logging.getLogger(__name__)

# ``X | None`` produces ``types.UnionType`` rather than ``typing.Union``.
_UNION_TYPES = (Union, types.UnionType)


class NotARecordError(TypeError):
    """Raised when a value cannot be turned into a dataclass record."""


class FormDepthError(RecursionError):
    """Raised when records nest deeper than allowed or refer back to themselves."""


class Component(NamedTuple):
    """One visible field of a record as seen by the flattener."""

    name: str
    type: Any
    value: Any
    inline: bool
    tags: str


def is_record(value: Any) -> bool:
    """Return ``True`` for dataclass *instances* (not dataclass types)."""

    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_optional(tp: Any) -> bool:
    return get_origin(tp) in _UNION_TYPES and type(None) in get_args(tp)


def element_type(tp: Any) -> Any:
    """Peel one level of ``Optional``/``Annotated`` from ``tp``.

    ``Optional[Address]`` is the closest Python analogue of a pointer to a
    record, so its element type is ``Address``. Unions containing more than
    one non-``None`` member are returned unchanged.
    """

    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    if _is_optional(tp):
        members = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return tp


def _field_owner(cls: type, f: dataclasses.Field) -> type:
    """Return the class in ``cls.__mro__`` that declared ``f``.

    Subclasses share the ``Field`` objects of inherited fields, so the most
    basic class whose field table holds this exact object is its owner.
    """

    for base in reversed(cls.__mro__):
        if base.__dict__.get("__dataclass_fields__", {}).get(f.name) is f:
            return base
    return cls


def _annotation_namespace(owner: type) -> Dict[str, Any]:
    """Names visible to a postponed annotation declared on ``owner``.

    Module globals come first, then non-field class attributes (nested
    classes, aliases). Field names are left out because their class
    attributes hold defaults, not types. The owner itself is always present
    so self-references resolve even for classes defined inside functions.
    """

    module = sys.modules.get(owner.__module__)
    namespace: Dict[str, Any] = dict(vars(module)) if module is not None else {}
    field_names = set(owner.__dict__.get("__dataclass_fields__", {}))
    namespace.update(
        (name, value) for name, value in vars(owner).items() if name not in field_names
    )
    namespace.setdefault(owner.__name__, owner)
    return namespace


def _resolve_field_type(cls: type, f: dataclasses.Field) -> Any:
    """Resolve the declared type of a single dataclass field.

    Without postponed evaluation, a field named after its own type
    (``Address: Optional[Address] = None``) evaluates the annotation after the
    default is bound in the class body, so ``f.type`` ends up as the default's
    ``Field`` object or ``NoneType``. Those are reported and treated as
    ``Any``. String annotations that cannot be evaluated are kept as-is.
    """

    raw = f.type
    owner = _field_owner(cls, f)
    if isinstance(raw, dataclasses.Field) or (raw is type(None) and f.default is None):
        logger.warning(
            "Annotation of %s.%s was shadowed by its default value (%r); "
            "rename the field or use 'from __future__ import annotations'",
            owner.__qualname__,
            f.name,
            raw,
        )
        return Any

    holder = types.SimpleNamespace(__annotations__={f.name: raw})
    try:
        return get_type_hints(holder, globalns=_annotation_namespace(owner), include_extras=True)[f.name]
    except (NameError, TypeError, SyntaxError) as exc:
        logger.warning("Could not resolve type of %s.%s: %s", owner.__qualname__, f.name, exc)
        return raw


def component_types(cls: type) -> Dict[str, Any]:
    """Return the resolved type of every dataclass field of ``cls``.

    Each field is resolved on its own, so one unresolvable forward
    reference leaves its siblings untouched. Unresolved string annotations
    are returned verbatim and have no zero value.
    """

    return {f.name: _resolve_field_type(cls, f) for f in dataclasses.fields(cls)}


def zero_value(tp: Any) -> Any:
    """Return the zero value of the declared type ``tp``.

    Parameters
    ----------
    tp:
        A class or typing construct taken from a dataclass annotation.

    Returns
    -------
    Any
        * dataclasses: an instance using declared defaults, with zero values
          supplied for required fields;
        * ``Optional[T]``: ``None``;
        * other unions and ``Annotated[T, ...]``: zero of the first member;
        * ``Literal[...]``: the first literal;
        * generic containers (``List[str]``): an empty container;
        * enums: the first member;
        * other classes: ``tp()`` when it accepts no arguments;
        * anything else (``Any``, unresolved strings): ``None``.

    Raises
    ------
    FormDepthError
        If a required field refers back to a dataclass that is already being
        built, which would otherwise recurse forever.
    """

    return _zero(tp, ())


def _zero(tp: Any, building: Tuple[type, ...]) -> Any:
    if tp is Any or tp is None or isinstance(tp, str):
        return None

    if dataclasses.is_dataclass(tp) and isinstance(tp, type):
        return _zero_record(tp, building)

    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)
        if origin is Annotated:
            return _zero(args[0], building)
        if origin in _UNION_TYPES:
            if type(None) in args:
                return None
            return _zero(args[0], building)
        if origin is Literal:
            return args[0] if args else None
        # ``List[int]``/``dict[str, int]`` and friends: build an empty
        # instance of the runtime container class.
        return _zero(origin, building)

    if isinstance(tp, type):
        if issubclass(tp, enum.Enum):
            members = list(tp)
            return members[0] if members else None
        try:
            return tp()
        except TypeError:
            logger.debug("%s has no zero value; using None", tp)
            return None
    return None


def _zero_record(cls: type, building: Tuple[type, ...]) -> Any:
    """Instantiate ``cls`` with defaults and zero values for required fields."""

    if cls in building:
        chain = " -> ".join(c.__qualname__ for c in (*building, cls))
        logger.error("Cannot build a zero value for self-referential dataclass: %s", chain)
        raise FormDepthError(
            f"required fields of {cls.__qualname__} refer back to itself ({chain}); "
            "give the field a default or declare it Optional"
        )
    building = (*building, cls)

    hints = component_types(cls)
    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING:
            continue
        tp = hints.get(f.name, f.type)
        if isinstance(tp, str):
            logger.warning(
                "Required field %s.%s has unresolved type %r; using None",
                cls.__qualname__,
                f.name,
                tp,
            )
        kwargs[f.name] = _zero(tp, building)
    return cls(**kwargs)


def value_of(v: Any) -> Any:
    """Return the dataclass record behind ``v``.

    Rules, applied in order:

    1. A dataclass *class* is replaced with :func:`zero_value` of itself so
       an empty form can be produced from the type alone.
    2. ``weakref.ref`` handles are dereferenced until a concrete value
       remains.
    3. Anything that is not a dataclass instance raises
       :class:`NotARecordError`.
    """

    if isinstance(v, type) and dataclasses.is_dataclass(v):
        v = zero_value(v)

    while isinstance(v, weakref.ReferenceType):
        target = v()
        if target is None:
            logger.error("Dead weak reference passed where a record was expected")
            raise NotARecordError("invalid value; weak reference target no longer exists")
        v = target

    if not is_record(v):
        logger.error("Unsupported value of type %s; only dataclasses are supported", type(v).__name__)
        raise NotARecordError(
            f"invalid value of type {type(v).__name__}; only dataclasses are supported"
        )
    return v


def record_components(record: Any) -> Iterator[Component]:
    """Yield the visible fields of ``record`` in declaration order.

    Fields whose name begins with an underscore are private and skipped.
    Inherited fields come first, exactly as :func:`dataclasses.fields`
    reports them, which mirrors how embedding inlines fields in other
    languages.
    """

    hints = component_types(type(record))
    for f in dataclasses.fields(record):
        if f.name.startswith("_"):
            continue
        yield Component(
            name=f.name,
            type=hints.get(f.name, f.type),
            value=getattr(record, f.name),
            inline=is_inline(f),
            tags=tags_for(f),
        )
