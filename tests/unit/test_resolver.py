"""Unit tests for catalog resolution."""
from app.services.catalog.index import CatalogIndex
from app.services.ordering.aggregator import OrderAggregator
from app.services.ordering.extractor import TextOrderExtractor
from app.services.ordering.models import CanonicalOrderLine
from app.services.ordering.resolver import CatalogResolver


def _line(name, quantity=1, modifiers=None, catalog_object_id=None):
    return CanonicalOrderLine(
        normalized_name=name.strip().lower(),
        display_name=name,
        quantity=quantity,
        modifier_phrases=modifiers or [],
        catalog_object_id=catalog_object_id,
    )


class TestCatalogResolver:
    """Test mapping canonical lines to catalog ids."""

    def setup_method(self):
        self.resolver = CatalogResolver()

    def test_spoken_order_end_to_end(self, scenario_catalog):
        """Test burgers resolve to the catalog and coke falls back to a custom line."""
        index = CatalogIndex.build(scenario_catalog)
        raw = TextOrderExtractor().extract("can I get two rebel burgers and one coke")
        lines = OrderAggregator().aggregate(raw)

        burger, coke = self.resolver.resolve_all(lines, index)

        assert burger.catalog_object_id == "v1"
        assert burger.quantity == 2
        assert coke.is_fallback
        assert coke.name == "coke"
        assert coke.quantity == 1
        assert coke.base_price.amount == 1000

    def test_matched_modifiers(self, catalog_index):
        """Test matched modifier phrases become modifier ids."""
        resolved = self.resolver.resolve(
            _line("Rebel Burger", 1, ["bacon", "ketchup"]), catalog_index
        )
        assert resolved.catalog_object_id == "v1"
        assert resolved.modifier_ids == ["m1", "m3"]

    def test_unmatched_modifier_kept_in_note(self, catalog_index):
        """Test an unmatched modifier is dropped from ids but kept in the note."""
        resolved = self.resolver.resolve(_line("Rebel Burger", 1, ["extra cheese"]), catalog_index)

        assert resolved.catalog_object_id == "v1"
        assert resolved.modifier_ids == []
        assert "extra cheese" in resolved.note

    def test_fallback_note_lists_modifiers(self, catalog_index):
        """Test fallback lines carry modifier phrases as text."""
        resolved = self.resolver.resolve(_line("Onion Rings", 2, ["spicy", "large"]), catalog_index)

        assert resolved.is_fallback
        assert resolved.modifier_ids == []
        assert resolved.note == "Modifiers: spicy, large"

    def test_explicit_variation_id(self, catalog_index):
        """Test a known variation id is trusted over fuzzy matching."""
        resolved = self.resolver.resolve(_line("whatever", catalog_object_id="v2b"), catalog_index)
        assert resolved.catalog_object_id == "v2b"

    def test_explicit_item_id_uses_primary_variation(self, catalog_index):
        """Test a known item id resolves to its primary variation."""
        resolved = self.resolver.resolve(_line("whatever", catalog_object_id="i2"), catalog_index)
        assert resolved.catalog_object_id == "v2"

    def test_placeholder_and_unknown_ids_ignored(self, catalog_index):
        """Test placeholder or unknown ids fall back to name matching."""
        placeholder = self.resolver.resolve(
            _line("Fries", catalog_object_id="placeholder_fries"), catalog_index
        )
        unknown = self.resolver.resolve(_line("Fries", catalog_object_id="zzz"), catalog_index)

        assert placeholder.catalog_object_id == "v2"
        assert unknown.catalog_object_id == "v2"

    def test_item_without_variations(self, catalog_index):
        """Test an item with no variations resolves to its own id."""
        resolved = self.resolver.resolve(_line("Coke"), catalog_index)
        assert resolved.catalog_object_id == "i3"

    def test_empty_index_always_falls_back(self):
        """Test resolution is total even with an empty catalog."""
        index = CatalogIndex()
        lines = [_line("burger", 2, ["bacon"]), _line("fries"), _line("x", catalog_object_id="v1")]

        resolved = self.resolver.resolve_all(lines, index)

        assert len(resolved) == len(lines)
        assert all(line.is_fallback for line in resolved)
        assert [line.quantity for line in resolved] == [2, 1, 1]

    def test_custom_default_price(self, catalog_index):
        """Test the fallback price and currency are configurable."""
        resolver = CatalogResolver(default_price_amount=500, currency="CAD")
        resolved = resolver.resolve(_line("Poutine"), catalog_index)

        assert resolved.to_payload() == {
            "quantity": "1",
            "name": "Poutine",
            "base_price_money": {"amount": 500, "currency": "CAD"},
        }

    def test_matched_payload(self, catalog_index):
        """Test matched lines render catalog ids and string quantities."""
        resolved = self.resolver.resolve(_line("rebel burgers", 3, ["bacon"]), catalog_index)

        assert resolved.to_payload() == {
            "quantity": "3",
            "catalog_object_id": "v1",
            "modifiers": [{"catalog_object_id": "m1"}],
            "note": "Modifiers: bacon",
        }
