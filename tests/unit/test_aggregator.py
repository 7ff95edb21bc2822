"""Unit tests for order line aggregation."""
from app.services.ordering.aggregator import OrderAggregator
from app.services.ordering.models import RawOrderLine


class TestOrderAggregator:
    """Test merging raw lines into canonical lines."""

    def setup_method(self):
        self.aggregator = OrderAggregator()

    def test_merge_case_different_names(self):
        """Test "Fries" and "fries " merge with summed quantity."""
        lines = self.aggregator.aggregate([
            RawOrderLine(name="Fries", quantity=1),
            RawOrderLine(name="fries ", quantity=2),
        ])

        assert len(lines) == 1
        assert lines[0].normalized_name == "fries"
        assert lines[0].display_name == "Fries"
        assert lines[0].quantity == 3

    def test_first_occurrence_order(self):
        """Test output follows the first occurrence of each name."""
        lines = self.aggregator.aggregate([
            RawOrderLine(name="coke"),
            RawOrderLine(name="burger", quantity=2),
            RawOrderLine(name="Coke"),
        ])
        assert [(line.normalized_name, line.quantity) for line in lines] == [
            ("coke", 2),
            ("burger", 2),
        ]

    def test_modifier_union(self):
        """Test modifier phrases are unioned in first-seen order."""
        lines = self.aggregator.aggregate([
            RawOrderLine(name="burger", modifier_phrases=["bacon"]),
            RawOrderLine(name="Burger", modifier_phrases=["bacon", "ketchup"]),
        ])
        assert lines[0].modifier_phrases == ["bacon", "ketchup"]

    def test_catalog_object_id_kept(self):
        """Test the first supplied catalog id is carried over."""
        lines = self.aggregator.aggregate([
            RawOrderLine(name="fries"),
            RawOrderLine(name="fries", catalog_object_id="v2"),
        ])
        assert lines[0].catalog_object_id == "v2"

    def test_idempotent(self):
        """Test aggregating canonical lines again changes nothing."""
        raw = [
            RawOrderLine(name="Fries", quantity=1, modifier_phrases=["large"]),
            RawOrderLine(name="coke", quantity=2),
            RawOrderLine(name="fries", quantity=4, modifier_phrases=["salted"]),
        ]
        once = self.aggregator.aggregate(raw)
        twice = self.aggregator.aggregate(once)
        assert twice == once

    def test_quantity_conservation(self):
        """Test each name's total equals the sum of its raw quantities."""
        raw = [
            RawOrderLine(name="burger", quantity=2),
            RawOrderLine(name="fries", quantity=1),
            RawOrderLine(name="BURGER", quantity=5),
            RawOrderLine(name="fries", quantity=3),
        ]
        totals = {line.normalized_name: line.quantity for line in self.aggregator.aggregate(raw)}
        assert totals == {"burger": 7, "fries": 4}

    def test_blank_names_skipped(self):
        """Test lines without a usable name are dropped."""
        assert self.aggregator.aggregate([RawOrderLine(name="   ")]) == []

    def test_empty_input(self):
        """Test empty input yields no lines."""
        assert self.aggregator.aggregate([]) == []
