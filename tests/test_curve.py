"""Tests for eggnode.curve module."""

import copy
import logging

import pytest
from pydantic import ValidationError

from eggnode.config import settings
from eggnode.curve import CurveNode, CurveType, string_curve_type
from eggnode.nodes import PrimitiveNode


class TestCurveType:
    """Test the CurveType enumeration and its keywords."""

    @pytest.mark.parametrize("keyword", ["none", "xyz", "hpr", "t"])
    def test_keywords_render_back(self, keyword: str) -> None:
        """Test that each keyword parses and renders to itself."""
        assert str(string_curve_type(keyword)) == keyword
        assert f"{string_curve_type(keyword)}" == keyword

    def test_members(self) -> None:
        """Test the closed set of kinds."""
        assert [member.value for member in CurveType] == ["none", "xyz", "hpr", "t"]
        assert CurveType.PARAMETRIC is CurveType.T

    def test_none_renders_as_unspecified(self) -> None:
        """Test that the unspecified kind does not reuse a real keyword."""
        assert str(CurveType.NONE) == "none"
        assert str(CurveType.NONE) not in {"xyz", "hpr", "t"}


class TestStringCurveType:
    """Test keyword parsing."""

    def test_exact_match(self) -> None:
        """Test recognised keywords."""
        assert string_curve_type("xyz") is CurveType.XYZ
        assert string_curve_type("hpr") is CurveType.HPR
        assert string_curve_type("t") is CurveType.PARAMETRIC
        assert string_curve_type("none") is CurveType.NONE

    @pytest.mark.parametrize("token", ["XYZ", "Hpr", "bogus", "", " xyz", "parametric"])
    def test_unrecognised_falls_back_to_none(self, token: str) -> None:
        """Test that anything else, including other casings, is unspecified."""
        assert string_curve_type(token) is CurveType.NONE

    def test_on_unknown_callback(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that the callback receives unrecognised tokens instead of the log."""
        seen: list[str] = []
        with caplog.at_level(logging.WARNING, logger="eggnode.curve"):
            assert string_curve_type("XYZ", on_unknown=seen.append) is CurveType.NONE
            assert string_curve_type("xyz", on_unknown=seen.append) is CurveType.XYZ
            assert string_curve_type("none", on_unknown=seen.append) is CurveType.NONE
        assert seen == ["XYZ"]
        assert caplog.records == []

    def test_unknown_token_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the default diagnostic."""
        with caplog.at_level(logging.WARNING, logger="eggnode.curve"):
            string_curve_type("bogus")
        assert len(caplog.records) == 1
        assert caplog.records[0].token == "bogus"

    def test_warning_can_be_disabled(self, caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the warn_unknown_curve_type setting."""
        monkeypatch.setattr(settings, "warn_unknown_curve_type", False)
        with caplog.at_level(logging.WARNING, logger="eggnode.curve"):
            assert string_curve_type("bogus") is CurveType.NONE
        assert caplog.records == []

    def test_available_on_the_class(self) -> None:
        """Test that no instance is needed."""
        assert CurveNode.string_curve_type("hpr") is CurveType.HPR


class TestCurveNode:
    """Test CurveNode state and accessors."""

    def test_defaults(self) -> None:
        """Test a freshly built node."""
        node = CurveNode()
        assert node.get_subdiv() == settings.default_subdiv
        assert node.get_curve_type() is CurveType.NONE

    def test_default_subdiv_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the configured default applies to new nodes."""
        monkeypatch.setattr(settings, "default_subdiv", 12)
        assert CurveNode().get_subdiv() == 12
        assert CurveNode(subdiv=2).get_subdiv() == 2

    @pytest.mark.parametrize("value", [0, 1, 16, -1, -1000, 2**40])
    def test_subdiv_stored_verbatim(self, value: int) -> None:
        """Test that any integer is accepted, including negative ones."""
        node = CurveNode()
        node.set_subdiv(value)
        assert node.get_subdiv() == value

    def test_set_curve_type(self) -> None:
        """Test the curve type accessor pair."""
        node = CurveNode()
        node.set_curve_type(CurveType.HPR)
        assert node.get_curve_type() is CurveType.HPR

    def test_set_curve_type_parses_keywords(self) -> None:
        """Test that keyword strings are normalised to members."""
        node = CurveNode()
        node.set_curve_type("hpr")
        assert node.get_curve_type() is CurveType.HPR

        node.set_curve_type("XYZ")
        assert node.get_curve_type() is CurveType.NONE
        assert isinstance(node.get_curve_type(), CurveType)
        assert node.model_dump(mode="json")["curve_type"] == "none"

    def test_attribute_assignment_is_validated(self) -> None:
        """Test that direct assignment cannot store a non-member."""
        node = CurveNode()
        node.curve_type = "t"
        assert node.curve_type is CurveType.T
        with pytest.raises(ValidationError):
            node.set_curve_type(42)
        assert node.get_curve_type() is CurveType.T

    def test_is_a_primitive(self) -> None:
        """Test the classification of curves."""
        assert CurveNode().is_of_type(PrimitiveNode.get_class_type())


class TestCurveNodeCopy:
    """Test that copies are independent values."""

    def test_from_copy(self) -> None:
        """Test copy construction."""
        original = CurveNode("path", subdiv=4, curve_type=CurveType.HPR)
        duplicate = CurveNode.from_copy(original)

        assert duplicate == original
        assert duplicate is not original
        duplicate.set_subdiv(9)
        assert original.get_subdiv() == 4
        assert duplicate.get_curve_type() is CurveType.HPR

    def test_copy_module(self) -> None:
        """Test copy.copy and model_copy."""
        original = CurveNode(subdiv=4, curve_type=CurveType.HPR)
        for duplicate in (copy.copy(original), original.model_copy()):
            duplicate.set_subdiv(1)
            duplicate.set_curve_type(CurveType.XYZ)
            assert original.get_subdiv() == 4
            assert original.get_curve_type() is CurveType.HPR

    def test_assign(self) -> None:
        """Test overwriting a node's values with another's."""
        source = CurveNode("src", subdiv=7, curve_type=CurveType.T)
        target = CurveNode("dst")

        assert target.assign(source) is target
        assert (target.name, target.subdiv, target.curve_type) == ("src", 7, CurveType.T)
        source.set_subdiv(0)
        assert target.get_subdiv() == 7


class TestCurveNodeFromParser:
    """Test building nodes from tokenised file input and dumping them back."""

    def test_validate_keyword_strings(self) -> None:
        """Test that curve kinds given as keywords are parsed."""
        node = CurveNode.model_validate({"name": "path", "subdiv": 8, "curve_type": "xyz"})
        assert node.get_curve_type() is CurveType.XYZ
        assert node.get_subdiv() == 8

    def test_validate_unknown_keyword(self) -> None:
        """Test that an unrecognised keyword does not abort the load."""
        node = CurveNode.model_validate({"curve_type": "quaternion"})
        assert node.get_curve_type() is CurveType.NONE

    def test_dump_renders_keywords(self) -> None:
        """Test the values handed to a writer."""
        node = CurveNode("path", subdiv=-3, curve_type=CurveType.HPR)
        assert node.model_dump(mode="json") == {"name": "path", "subdiv": -3, "curve_type": "hpr"}
