"""Tests for the Flask integration in :mod:`form_fields.web`.

The extension exposes ``form_fields`` as a Jinja global. These tests render
small inline templates through Flask to confirm descriptors reach the
template, that autoescaping applies to values but not to trusted footers,
and that ``FORM_FIELDS_MAX_DEPTH`` is honoured.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

pytest.importorskip("flask")

from flask import Flask, render_template_string  # noqa: E402

from form_fields import DEFAULT_MAX_DEPTH, FormDepthError, form_field  # noqa: E402
from form_fields.web import CONFIG_MAX_DEPTH, EXTENSION_KEY, FormFields  # noqa: E402


@dataclass
class Address:
    Street1: str = form_field("label=Street;class=wide", default="")


@dataclass
class Signup:
    Name: str = form_field("id=name", default="")
    Password: str = form_field("type=password;footer=<em>Keep it secret</em>", default="")
    Address: Address = field(default_factory=Address)


@dataclass
class Loop:
    Next: Optional["Loop"] = None
    Value: str = ""


TEMPLATE = (
    "{% for f in form_fields(value) %}"
    '<input name="{{ f.name }}" type="{{ f.type }}" placeholder="{{ f.placeholder }}" '
    'class="{{ f.css_class }}" value="{{ f.value }}">{{ f.footer }}\n'
    "{% endfor %}"
)


@pytest.fixture()
def app():
    """Return a Flask app with the extension registered via ``init_app``."""

    flask_app = Flask(__name__)
    ext = FormFields()
    ext.init_app(flask_app)
    return flask_app


def test_init_app_registers_extension_and_default_config(app):
    """The extension stores itself and seeds the depth setting."""

    assert isinstance(app.extensions[EXTENSION_KEY], FormFields)
    assert app.config[CONFIG_MAX_DEPTH] == DEFAULT_MAX_DEPTH
    assert "form_fields" in app.jinja_env.globals


def test_constructor_accepts_app():
    """Passing the app to the constructor is equivalent to ``init_app``."""

    flask_app = Flask(__name__)
    ext = FormFields(flask_app)
    assert flask_app.extensions[EXTENSION_KEY] is ext


def test_existing_config_is_preserved():
    """``init_app`` does not overwrite an explicit depth setting."""

    flask_app = Flask(__name__)
    flask_app.config[CONFIG_MAX_DEPTH] = 3
    FormFields(flask_app)
    assert flask_app.config[CONFIG_MAX_DEPTH] == 3


def test_template_renders_descriptors(app):
    """Descriptors are available in templates in declaration order."""

    value = Signup(Name="Michael Scott", Address=Address("123 Test St"))
    with app.app_context():
        html = render_template_string(TEMPLATE, value=value)

    lines = html.strip().splitlines()
    assert len(lines) == 3
    assert 'name="Name"' in lines[0]
    assert 'value="Michael Scott"' in lines[0]
    assert 'type="password"' in lines[1]
    assert 'name="Address.Street1"' in lines[2]
    assert 'placeholder="Street"' in lines[2]
    assert 'class="wide"' in lines[2]


def test_values_are_escaped_but_footer_is_trusted(app):
    """Autoescaping applies to values while footers render verbatim."""

    value = Signup(Name="<b>Michael</b>")
    with app.app_context():
        html = render_template_string(TEMPLATE, value=value)

    assert "&lt;b&gt;Michael&lt;/b&gt;" in html
    assert "<em>Keep it secret</em>" in html


def test_template_accepts_dataclass_type(app):
    """Passing the class renders an empty form."""

    with app.app_context():
        html = render_template_string(TEMPLATE, value=Signup)
    assert html.count("<input") == 3
    assert 'value=""' in html


def test_configured_depth_is_used(app):
    """``FORM_FIELDS_MAX_DEPTH`` bounds recursion inside templates."""

    app.config[CONFIG_MAX_DEPTH] = 2
    ext = app.extensions[EXTENSION_KEY]
    with app.app_context():
        with pytest.raises(FormDepthError) as excinfo:
            ext.fields_for(Loop)
    assert "2 levels" in str(excinfo.value)


@pytest.mark.parametrize("bad", ["deep", None, 0, -4])
def test_invalid_depth_falls_back_to_default(app, caplog, bad):
    """Unusable settings log a warning and use the default limit."""

    app.config[CONFIG_MAX_DEPTH] = bad
    ext = app.extensions[EXTENSION_KEY]
    with app.app_context():
        with caplog.at_level(logging.WARNING, logger="form_fields.web"):
            assert len(ext.fields_for(Signup)) == 3
            with pytest.raises(FormDepthError) as excinfo:
                ext.fields_for(Loop)
    assert CONFIG_MAX_DEPTH in caplog.text
    assert f"{DEFAULT_MAX_DEPTH} levels" in str(excinfo.value)
