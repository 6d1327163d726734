"""Flask integration exposing :func:`form_fields.fields` to Jinja templates.

The library never renders HTML itself. Instead this extension makes the
descriptor list available inside templates so applications keep full control
over markup::

    from flask import Flask
    from form_fields.web import FormFields

    app = Flask(__name__)
    FormFields(app)

.. code-block:: jinja

    {% for f in form_fields(signup) %}
      <label for="{{ f.id }}">{{ f.label }}</label>
      <input type="{{ f.type }}" name="{{ f.name }}" id="{{ f.id }}"
             class="{{ f.css_class }}" placeholder="{{ f.placeholder }}"
             value="{{ f.value }}" {{ f.options | join(" ") }}>
      {{ f.footer }}
    {% endfor %}

``footer`` is a :class:`markupsafe.Markup` instance so Jinja's autoescaping
leaves it untouched while every other attribute is escaped as usual.

Configuration
-------------
``FORM_FIELDS_MAX_DEPTH``
    Maximum record nesting passed to :func:`form_fields.fields`. Defaults to
    :data:`form_fields.flatten.DEFAULT_MAX_DEPTH`. Values that are not
    positive integers are logged and replaced with the default.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from flask import Flask, current_app

from .field import Field
from .flatten import DEFAULT_MAX_DEPTH, fields

__all__ = ["FormFields", "EXTENSION_KEY", "CONFIG_MAX_DEPTH"]

logger = logging.getLogger(__name__)

EXTENSION_KEY = "form_fields"
CONFIG_MAX_DEPTH = "FORM_FIELDS_MAX_DEPTH"


class FormFields:
    """Register ``form_fields(value)`` as a Jinja global on a Flask app.

    Follows the usual Flask extension pattern: pass the application to the
    constructor, or create the extension first and call :meth:`init_app`
    from an application factory.
    """

    def __init__(self, app: Optional[Flask] = None) -> None:
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Attach the extension and its template global to ``app``."""

        app.config.setdefault(CONFIG_MAX_DEPTH, DEFAULT_MAX_DEPTH)
        app.extensions[EXTENSION_KEY] = self
        app.add_template_global(self.fields_for, "form_fields")

    @staticmethod
    def _max_depth() -> int:
        raw = current_app.config.get(CONFIG_MAX_DEPTH, DEFAULT_MAX_DEPTH)
        try:
            depth = int(raw)
        except (TypeError, ValueError):
            logger.warning(
                "%s must be an integer, got %r. Using %d.",
                CONFIG_MAX_DEPTH,
                raw,
                DEFAULT_MAX_DEPTH,
            )
            return DEFAULT_MAX_DEPTH
        if depth < 1:
            logger.warning(
                "%s must be positive, got %d. Using %d.",
                CONFIG_MAX_DEPTH,
                depth,
                DEFAULT_MAX_DEPTH,
            )
            return DEFAULT_MAX_DEPTH
        return depth

    def fields_for(self, value: Any) -> List[Field]:
        """Return the descriptors for ``value`` using the app's configuration."""

        return fields(value, max_depth=self._max_depth())
