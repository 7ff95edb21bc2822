"""In-memory catalog provider."""
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from app.services.catalog.base import CatalogProvider

DEMO_CATALOG: List[Dict[str, Any]] = [
    {"id": "item_1", "type": "ITEM", "name": "Rebel Burger",
     "description": "Classic burger with cheese, lettuce, and special sauce",
     "variations": [{"id": "var_1"}]},
    {"id": "var_1", "type": "ITEM_VARIATION", "item_id": "item_1", "name": "Regular", "price": 899},
    {"id": "item_2", "type": "ITEM", "name": "Fries", "description": "Crispy golden fries",
     "variations": [{"id": "var_2"}]},
    {"id": "var_2", "type": "ITEM_VARIATION", "item_id": "item_2", "name": "Regular", "price": 399},
    {"id": "item_3", "type": "ITEM", "name": "Coke", "description": "Refreshing cola",
     "variations": [{"id": "var_3"}]},
    {"id": "var_3", "type": "ITEM_VARIATION", "item_id": "item_3", "name": "Regular", "price": 299},
    {"id": "item_4", "type": "ITEM", "name": "Milkshake", "description": "Creamy vanilla milkshake",
     "variations": [{"id": "var_4"}]},
    {"id": "var_4", "type": "ITEM_VARIATION", "item_id": "item_4", "name": "Regular", "price": 499},
    {"id": "mod_1", "type": "MODIFIER", "name": "Extra Cheese", "price": 100},
    {"id": "mod_2", "type": "MODIFIER", "name": "Bacon", "price": 200},
    {"id": "mod_3", "type": "MODIFIER", "name": "No Onions", "price": 0},
]


class InMemoryCatalogProvider(CatalogProvider):
    """Catalog provider backed by a YAML snapshot file."""

    def __init__(self, catalog_file: Optional[str] = None):
        """Initialize with optional catalog file path."""
        if catalog_file is None:
            catalog_file = Path(__file__).parent / "data" / "catalog.yaml"
        self.catalog_file = Path(catalog_file)

    async def fetch_snapshot(self) -> List[Dict[str, Any]]:
        """Load catalog records from the YAML file."""
        if not self.catalog_file.exists():
            # Demo catalog if file doesn't exist
            return [dict(record) for record in DEMO_CATALOG]
        with open(self.catalog_file, "r") as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data, list):
            return data
        return data.get("objects", [])
