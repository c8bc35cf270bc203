"""Tests for TypeReport building."""

import json

import pytest

from investigator import Introspector, NotLoadedError, TypeReport, build_report
from tests.fixtures.sample_types import Circle, Ring


class TestBuildReport:
    """Test the report collects every query."""

    def test_report_for_circle(self, load):
        """Test counts, hierarchy and members are filled in."""
        report = build_report(load(Circle(2)))

        assert isinstance(report, TypeReport)
        assert report.type_name == "tests.fixtures.sample_types.Circle"
        assert report.simple_name == "Circle"
        assert report.total_methods == 2
        assert report.total_constructors == 1
        assert report.total_fields == 2
        assert report.constant_fields == 1
        assert report.static_methods == 0
        assert report.interfaces == ["Drawable"]
        assert report.is_extending is True
        assert report.parent_class == "Shape"
        assert report.parent_is_abstract is True
        assert report.all_field_names == ["PI", "name", "radius"]
        assert report.inheritance_chain == "object->Shape->Circle"
        assert {m.name for m in report.members} == {"PI", "radius", "__init__", "area", "draw"}

    def test_custom_delimiter(self, load):
        """Test the delimiter reaches the chain."""
        report = build_report(load(Ring()), delimiter=".")
        assert report.inheritance_chain == "object.Shape.Circle.Ring"
        assert report.interfaces == []

    def test_member_summary(self, load):
        """Test member summaries carry kind and flags."""
        report = build_report(load(Circle()))
        members = {m.name: m for m in report.members}
        assert members["PI"].kind == "field"
        assert members["PI"].is_final is True
        assert members["__init__"].kind == "constructor"
        assert members["__init__"].parameter_count == 1
        assert members["radius"].parameter_count is None

    def test_json_dump(self, load):
        """Test the report serialises to JSON."""
        data = json.loads(build_report(load(Circle())).model_dump_json())
        assert data["simple_name"] == "Circle"
        assert data["members"][0]["name"] == "PI"

    def test_unloaded(self):
        """Test building a report needs a loaded object."""
        with pytest.raises(NotLoadedError):
            build_report(Introspector())
