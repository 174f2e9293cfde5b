# export.py
import csv
import io
import json
from typing import Any, Dict, Iterable, List, Tuple

from config import FOOTPRINT_LOCALE
from models import FootprintResult, Product

CSV_FILENAME = "products_carbon_footprint.csv"
JSON_FILENAME = "products_carbon_footprint.json"

CSV_HEADERS = [
    "name",
    "category",
    "price",
    "weight_kg",
    "origin_country",
    "packaging_type",
    "base_production_emission",
    "footprint_score",
    "estimated_kgCO2e",
    "footprint_label",
    "in_stock",
]

ScoredProduct = Tuple[Product, FootprintResult]


def product_with_footprint(product: Product, footprint: FootprintResult, locale: str = FOOTPRINT_LOCALE) -> Dict[str, Any]:
    """Full nested record: every product field plus a `footprint` object."""
    record = product.to_dict()
    record["footprint"] = footprint.to_dict(locale)
    return record


def to_csv(scored_products: Iterable[ScoredProduct], locale: str = FOOTPRINT_LOCALE) -> str:
    """
    Serialize (Product, FootprintResult) pairs to CSV text, one row per product.
    Column order follows CSV_HEADERS; estimated_kgCO2e is fixed to 2 decimals.
    """
    output_buffer = io.StringIO()
    writer = csv.writer(output_buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for product, footprint in scored_products:
        writer.writerow([
            product.name,
            product.category.value,
            product.price,
            product.weight_kg,
            product.origin_country,
            product.packaging_type.value,
            product.base_production_emission,
            footprint.score,
            f"{footprint.estimated_kgco2e:.2f}",
            footprint.label.localized(locale),
            str(product.in_stock).lower(),
        ])
    return output_buffer.getvalue()


def to_json(scored_products: Iterable[ScoredProduct], locale: str = FOOTPRINT_LOCALE) -> str:
    records: List[Dict[str, Any]] = [
        product_with_footprint(product, footprint, locale)
        for product, footprint in scored_products
    ]
    return json.dumps(records, indent=2, ensure_ascii=False)
