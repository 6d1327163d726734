"""Form Fields library.

This package turns a dataclass into a flat, ordered list of
:class:`~form_fields.field.Field` descriptors that an HTML template can loop
over to render a form. A typical workflow is to declare a dataclass,
optionally annotate its fields with :func:`form_field`, then call
:func:`fields` with an instance (or the class itself for an empty form) and
pass the result to a template.

Example
-------
>>> from dataclasses import dataclass
>>> from form_fields import fields, form_field
>>> @dataclass
... class Login:
...     Email: str = form_field("type=email;label=Email Address", default="")
...     Password: str = form_field("type=password", default="")
...     Token: str = form_field("-", default="")
>>> [(f.name, f.type, f.placeholder) for f in fields(Login)]
[('Email', 'email', 'Email Address'), ('Password', 'password', 'Password')]

Annotation Keys
---------------
``name``        replaces the dotted path used as the input name
``label``       sets the label *and* the placeholder
``placeholder`` sets the placeholder (wins over ``label``)
``type``        HTML input type, ``text`` by default
``id``          DOM id
``class``       CSS class
``footer``      trusted HTML emitted after the input
``readonly``    ``true`` marks the descriptor read-only
``options``     comma separated tokens such as ``readonly,required``
``-``           skip the field entirely

Flask applications can expose the flattener to Jinja templates through
:class:`form_fields.web.FormFields`, which is imported separately so Flask
remains an optional dependency.
"""

__version__ = "0.1.0"

from .field import Field
from .flatten import DEFAULT_MAX_DEPTH, FormDepthError, fields
from .tags import form_field, inline_field, parse_tags
from .values import NotARecordError, value_of, zero_value

__all__ = [
    "__version__",
    "Field",
    "fields",
    "form_field",
    "inline_field",
    "parse_tags",
    "value_of",
    "zero_value",
    "NotARecordError",
    "FormDepthError",
    "DEFAULT_MAX_DEPTH",
]
