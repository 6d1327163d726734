"""Tests for :class:`form_fields.field.Field` construction and overrides."""

import logging
import sys
from pathlib import Path

from markupsafe import Markup

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from form_fields.field import Field  # noqa: E402


def test_default_uses_dotted_path_and_leaf_name():
    """Defaults derive from the declared names."""

    f = Field.default(("Address", "Street1"), "123 Test St")
    assert f == Field(
        name="Address.Street1",
        label="Street1",
        placeholder="Street1",
        type="text",
        value="123 Test St",
    )
    assert f.id == ""
    assert f.css_class == ""
    assert f.read_only is False
    assert f.options == []
    assert f.footer == ""


def test_name_override_replaces_path():
    """``name`` is used verbatim without the path prefix."""

    f = Field.default(("Address", "Street1"), "")
    f.apply_tags({"name": "street"})
    assert f.name == "street"
    assert f.label == "Street1"


def test_label_also_sets_placeholder():
    """A lone ``label`` doubles as the placeholder."""

    f = Field.default(("Name",), "")
    f.apply_tags({"label": "Full Name"})
    assert (f.label, f.placeholder) == ("Full Name", "Full Name")


def test_placeholder_wins_over_label():
    """An explicit placeholder survives regardless of mapping order."""

    f = Field.default(("Name",), "")
    f.apply_tags({"placeholder": "Jane Doe", "label": "Full Name"})
    assert f.label == "Full Name"
    assert f.placeholder == "Jane Doe"


def test_simple_overrides():
    """``type``, ``id`` and ``class`` map onto their attributes."""

    f = Field.default(("Password",), "")
    f.apply_tags({"type": "password", "id": "pw", "class": "custom-css-class"})
    assert f.type == "password"
    assert f.id == "pw"
    assert f.css_class == "custom-css-class"


def test_footer_is_trusted_markup():
    """Footers are wrapped in ``Markup`` so templates skip escaping."""

    f = Field.default(("Password",), "")
    f.apply_tags({"footer": "<em>Something super secret!</em>"})
    assert isinstance(f.footer, Markup)
    assert f.footer == Markup("<em>Something super secret!</em>")
    assert str(Markup.escape(f.footer)) == "<em>Something super secret!</em>"


def test_readonly_flag():
    """Only the literal ``true`` enables the read-only flag."""

    f = Field.default(("Name",), "")
    f.apply_tags({"readonly": "true"})
    assert f.read_only is True
    f.apply_tags({"readonly": "yes"})
    assert f.read_only is False


def test_options_are_split_verbatim():
    """Options keep their order and surrounding characters."""

    f = Field.default(("Name",), "")
    f.apply_tags({"options": "readonly,required"})
    assert f.options == ["readonly", "required"]
    f.apply_tags({"options": "readonly, required"})
    assert f.options == ["readonly", " required"]


def test_readonly_option_does_not_set_flag():
    """``options=readonly`` and ``readonly=true`` are independent."""

    f = Field.default(("Name",), "")
    f.apply_tags({"options": "readonly"})
    assert f.options == ["readonly"]
    assert f.read_only is False


def test_unknown_keys_are_ignored(caplog):
    """Unknown keys leave the descriptor untouched and log at debug level."""

    f = Field.default(("Name",), "x")
    expected = Field.default(("Name",), "x")
    with caplog.at_level(logging.DEBUG, logger="form_fields.field"):
        f.apply_tags({"colour": "red"})
    assert f == expected
    assert "colour" in caplog.text
