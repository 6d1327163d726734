"""Descriptor describing a single HTML form input.

:class:`Field` instances are produced by :func:`form_fields.fields` and
consumed by templates. A template typically loops over the list and emits a
``<label>``/``<input>`` pair for each entry, using ``name`` for the input
name, ``value`` for the current value and ``footer`` for optional help text.

Example
-------
>>> from form_fields.field import Field
>>> f = Field.default(["Address", "Street1"], "123 Test St")
>>> f.name, f.label, f.placeholder, f.type
('Address.Street1', 'Street1', 'Street1', 'text')
>>> f.apply_tags({"label": "Street", "options": "readonly,required"})
>>> f.placeholder, f.options
('Street', ['readonly', 'required'])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Sequence

from markupsafe import Markup

__all__ = ["Field", "KNOWN_TAGS"]

logger = logging.getLogger(__name__)

# Keys understood by :meth:`Field.apply_tags`. Anything else is ignored.
KNOWN_TAGS = (
    "name",
    "label",
    "placeholder",
    "type",
    "id",
    "footer",
    "class",
    "readonly",
    "options",
)


@dataclass
class Field:
    """Everything a template needs to render one form input.

    Attributes
    ----------
    name:
        Dotted path of the dataclass field (``"Address.Street1"``) unless a
        ``name`` annotation overrides it.
    label, placeholder:
        Human readable text. Both default to the declared field name.
    type:
        HTML input type, ``"text"`` unless overridden.
    id, css_class:
        Optional DOM id and CSS class.
    read_only:
        Set by ``readonly=true``.
    options:
        Tokens from ``options=a,b`` in declaration order. Renderers decide
        what ``readonly`` or ``required`` mean.
    footer:
        Trusted HTML emitted after the input without escaping.
    value:
        Current value of the dataclass field.
    """

    name: str
    label: str
    placeholder: str
    type: str = "text"
    id: str = ""
    css_class: str = ""
    read_only: bool = False
    options: List[str] = field(default_factory=list)
    footer: Markup = field(default_factory=Markup)
    value: Any = None

    @classmethod
    def default(cls, path: Sequence[str], value: Any) -> "Field":
        """Build the descriptor used when no annotation applies.

        ``path`` lists the declared names from the outermost record down to
        the leaf; its last entry doubles as the label and placeholder.
        """

        leaf = path[-1]
        return cls(
            name=".".join(path),
            label=leaf,
            placeholder=leaf,
            type="text",
            value=value,
        )

    def apply_tags(self, tags: Mapping[str, str]) -> None:
        """Override defaults with the values of a parsed annotation.

        The order below is significant: ``label`` also sets the placeholder
        so a lone ``label`` yields a sensible placeholder, while an explicit
        ``placeholder`` must still win when both are given.
        """

        if "name" in tags:
            self.name = tags["name"]
        if "label" in tags:
            self.label = tags["label"]
            # Must stay ahead of the placeholder check below.
            self.placeholder = tags["label"]
        if "placeholder" in tags:
            self.placeholder = tags["placeholder"]
        if "type" in tags:
            self.type = tags["type"]
        if "id" in tags:
            self.id = tags["id"]
        if "footer" in tags:
            self.footer = Markup(tags["footer"])
        if "class" in tags:
            self.css_class = tags["class"]
        if "readonly" in tags:
            self.read_only = tags["readonly"] == "true"
        if "options" in tags:
            self.options = tags["options"].split(",")

        unknown = [key for key in tags if key not in KNOWN_TAGS]
        if unknown:
            logger.debug("Ignoring unknown form tags %s on %s", unknown, self.name)
