"""Tests for the structured query representation and builder."""

import pytest
from pydantic import ValidationError

from partquery.constants import Direction
from partquery.structured import CompositeFilter, OrderBy, PropertyFilter, PropertyOperator, StructuredQuery
from partquery.values import ValueType


class TestPropertyFilter:
    """Tests for PropertyFilter."""

    @pytest.mark.parametrize(
        "factory,operator",
        [
            (PropertyFilter.eq, PropertyOperator.EQUAL),
            (PropertyFilter.gt, PropertyOperator.GREATER_THAN),
            (PropertyFilter.ge, PropertyOperator.GREATER_THAN_OR_EQUAL),
            (PropertyFilter.lt, PropertyOperator.LESS_THAN),
            (PropertyFilter.le, PropertyOperator.LESS_THAN_OR_EQUAL),
        ],
    )
    def test_factories(self, factory, operator):
        """Test that each factory sets its operator and wraps the value."""
        f = factory("age", 30)
        assert f.property == "age"
        assert f.operator == operator
        assert f.value.type == ValueType.LONG

    def test_is_null(self):
        """Test that is_null is equality with a null value."""
        f = PropertyFilter.is_null("city")
        assert f.operator == PropertyOperator.EQUAL
        assert f.value.is_null

    def test_frozen(self):
        """Test that filters cannot be modified."""
        f = PropertyFilter.eq("age", 30)
        with pytest.raises(ValidationError):
            f.property = "name"

    def test_to_dict(self):
        """Test the REST rendering of a property filter."""
        assert PropertyFilter.gt("age", 21).to_dict() == {
            "propertyFilter": {
                "property": {"name": "age"},
                "op": "GREATER_THAN",
                "value": {"integerValue": "21"},
            }
        }


class TestCompositeFilter:
    """Tests for CompositeFilter."""

    def test_and_keeps_order(self):
        """Test that child filters keep their order."""
        first, second, third = PropertyFilter.eq("a", 1), PropertyFilter.eq("b", 2), PropertyFilter.eq("c", 3)
        composite = CompositeFilter.and_(first, second, third)
        assert composite.operator == "AND"
        assert composite.filters == (first, second, third)

    def test_nested_to_dict(self):
        """Test the REST rendering of a composite filter."""
        composite = CompositeFilter.and_(PropertyFilter.gt("age", 21), PropertyFilter.is_null("active"))
        rendered = composite.to_dict()["compositeFilter"]
        assert rendered["op"] == "AND"
        assert [f["propertyFilter"]["property"]["name"] for f in rendered["filters"]] == ["age", "active"]
        assert rendered["filters"][1]["propertyFilter"]["value"] == {"nullValue": None}


class TestQueryBuilder:
    """Tests for QueryBuilder and StructuredQuery."""

    def test_build_full_query(self):
        """Test building a query with every part set."""
        query = (
            StructuredQuery.new_entity_query_builder()
            .set_kind("Person")
            .set_filter(PropertyFilter.eq("city", "Paris"))
            .set_order_by(OrderBy.desc("age"), OrderBy.asc("name"))
            .set_limit(5)
            .build()
        )
        assert query.kind == "Person"
        assert query.filter == PropertyFilter.eq("city", "Paris")
        assert [o.direction for o in query.order_by] == [Direction.DESCENDING, Direction.ASCENDING]
        assert query.limit == 5

    def test_defaults(self):
        """Test that filter, order and limit default to empty."""
        query = StructuredQuery.new_entity_query_builder().set_kind("Person").build()
        assert query.filter is None
        assert query.order_by == ()
        assert query.limit is None

    def test_kind_required(self):
        """Test that building without a kind fails."""
        with pytest.raises(ValueError):
            StructuredQuery.new_entity_query_builder().build()

    def test_builders_are_independent(self):
        """Test that builders do not share state."""
        a = StructuredQuery.new_entity_query_builder().set_kind("A")
        b = StructuredQuery.new_entity_query_builder().set_kind("B").set_limit(1)
        assert a.build().limit is None
        assert b.build().kind == "B"

    def test_to_dict_omits_missing_parts(self):
        """Test that unset parts are left out of the rendering."""
        query = StructuredQuery(kind="Person")
        assert query.to_dict() == {"kind": [{"name": "Person"}]}

    def test_to_dict_full(self):
        """Test the REST rendering of a full query."""
        query = StructuredQuery(
            kind="Person",
            filter=PropertyFilter.eq("city", "Paris"),
            order_by=(OrderBy.asc("name"),),
            limit=2,
        )
        body = query.to_dict()
        assert body["order"] == [{"property": {"name": "name"}, "direction": "ASCENDING"}]
        assert body["limit"] == 2
        assert body["filter"]["propertyFilter"]["value"] == {"stringValue": "Paris"}
