import csv
import io
import json
import unittest

from export import CSV_HEADERS, to_csv, to_json
from models import Product
from scoring import estimate


def scored(*products):
    return [(product, estimate(product)) for product in products]


class TestExport(unittest.TestCase):
    def setUp(self):
        self.laptop = Product(
            id="laptop", name="Laptop, 14 inch", category="electronics", price=32999.0,
            weight_kg=2.0, origin_country="CN", packaging_type="plastic",
            base_production_emission=5.0,
        )
        self.oil = Product(
            id="oil", name="Olive Oil", category="food", price=349.9,
            weight_kg=1.1, origin_country="TR", packaging_type="glass",
            base_production_emission=3.2, override_emission=0.75, in_stock=False,
        )

    def test_csv_columns_and_quoting(self):
        rows = list(csv.reader(io.StringIO(to_csv(scored(self.laptop, self.oil)))))

        self.assertEqual(rows[0], CSV_HEADERS)
        self.assertEqual(len(rows), 3)

        laptop_row = dict(zip(CSV_HEADERS, rows[1]))
        self.assertEqual(laptop_row["name"], "Laptop, 14 inch")
        self.assertEqual(laptop_row["category"], "electronics")
        self.assertEqual(laptop_row["packaging_type"], "plastic")
        self.assertEqual(laptop_row["footprint_score"], "5")
        self.assertEqual(laptop_row["estimated_kgCO2e"], "12.00")
        self.assertEqual(laptop_row["footprint_label"], "Medium")
        self.assertEqual(laptop_row["in_stock"], "true")

        oil_row = dict(zip(CSV_HEADERS, rows[2]))
        self.assertEqual(oil_row["estimated_kgCO2e"], "0.75")
        self.assertEqual(oil_row["in_stock"], "false")

    def test_csv_localized_labels(self):
        rows = list(csv.reader(io.StringIO(to_csv(scored(self.laptop), locale="tr"))))
        self.assertEqual(rows[1][CSV_HEADERS.index("footprint_label")], "Orta")

    def test_json_nested_records(self):
        records = json.loads(to_json(scored(self.laptop, self.oil)))

        self.assertEqual([record["id"] for record in records], ["laptop", "oil"])
        oil_record = records[1]
        self.assertEqual(oil_record["override_emission"], 0.75)
        self.assertEqual(oil_record["footprint"]["estimated_kgCO2e"], 0.75)
        self.assertTrue(oil_record["footprint"]["overridden"])
        self.assertEqual(
            set(oil_record["footprint"]["breakdown"]),
            {"production", "shipping", "packaging", "weight"},
        )

    def test_json_keeps_non_ascii(self):
        text = to_json(scored(self.oil), locale="tr")
        self.assertIn("Düşük", text)
        self.assertEqual(json.loads(to_json([])), [])


if __name__ == "__main__":
    unittest.main()
