import csv
import io
import json
import unittest
from unittest import mock

import app as app_module
from catalog import CatalogStore
from db import init_db, make_engine, make_session_factory

TEST_PRODUCTS = [
    {
        "id": "laptop", "name": "Laptop", "category": "electronics", "price": 32999,
        "weight_kg": 2.0, "origin_country": "CN", "packaging_type": "plastic",
        "base_production_emission": 5.0,
    },
    {
        "id": "oil", "name": "Olive Oil", "category": "food", "price": 349.9,
        "weight_kg": 1.1, "origin_country": "TR", "packaging_type": "glass",
        "base_production_emission": 3.2,
    },
    {
        "id": "bottle", "name": "Water Bottle", "category": "home", "price": 449,
        "weight_kg": 0.35, "origin_country": "Atlantis", "packaging_type": "foo",
        "base_production_emission": 2.5, "in_stock": False,
    },
]


class TestApp(unittest.TestCase):
    def setUp(self):
        engine = make_engine("sqlite://")
        init_db(engine)
        self.store = CatalogStore(make_session_factory(engine))
        self.store.seed(TEST_PRODUCTS)

        store_patch = mock.patch.object(app_module, "store", self.store)
        store_patch.start()
        self.addCleanup(store_patch.stop)

        app_module.app.config["TESTING"] = True
        self.client = app_module.app.test_client()

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"ok": True})

    def test_list_products_with_footprint(self):
        response = self.client.get("/products")
        self.assertEqual(response.status_code, 200)
        products = response.get_json()
        self.assertEqual([product["id"] for product in products], ["laptop", "oil", "bottle"])

        laptop = products[0]
        self.assertEqual(laptop["footprint"]["score"], 5)
        self.assertEqual(laptop["footprint"]["label"], "Medium")
        self.assertAlmostEqual(laptop["footprint"]["estimated_kgCO2e"], 12.0)
        self.assertFalse(laptop["footprint"]["overridden"])

    def test_unknown_origin_and_packaging_are_scored(self):
        bottle = self.client.get("/products/bottle").get_json()
        self.assertEqual(bottle["packaging_type"], "unknown")
        self.assertAlmostEqual(bottle["footprint"]["breakdown"]["shipping"], 2.0)
        self.assertAlmostEqual(bottle["footprint"]["breakdown"]["packaging"], 0.3)

    def test_list_filters(self):
        low = self.client.get("/products?footprint=1-3").get_json()
        self.assertEqual([product["id"] for product in low], ["oil", "bottle"])

        food = self.client.get("/products?category=food").get_json()
        self.assertEqual([product["id"] for product in food], ["oil"])

        by_name = self.client.get("/products?sort=name-asc&search=o").get_json()
        self.assertEqual([product["id"] for product in by_name], ["laptop", "oil", "bottle"])

    def test_product_not_found(self):
        response = self.client.get("/products/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["error"], "not_found")

    def test_categories(self):
        self.assertEqual(self.client.get("/categories").get_json(), ["electronics", "food", "home"])

    def test_admin_override_flow(self):
        before = self.client.get("/products/laptop").get_json()["footprint"]

        response = self.client.put("/admin/products/laptop/override", json={"override_emission": 1.0})
        self.assertEqual(response.status_code, 200)
        after = response.get_json()
        self.assertEqual(after["override_emission"], 1.0)
        self.assertEqual(after["footprint"]["estimated_kgCO2e"], 1.0)
        self.assertEqual(after["footprint"]["score"], 1)
        self.assertEqual(after["footprint"]["label"], "Low")
        self.assertTrue(after["footprint"]["overridden"])
        self.assertEqual(after["footprint"]["breakdown"], before["breakdown"])

        admin_rows = self.client.get("/admin/products?category=electronics").get_json()
        self.assertEqual(len(admin_rows), 1)
        self.assertTrue(admin_rows[0]["footprint"]["overridden"])

        cleared = self.client.put("/admin/products/laptop/override", json={"override_emission": None})
        self.assertEqual(cleared.status_code, 200)
        self.assertIsNone(cleared.get_json()["override_emission"])
        self.assertEqual(cleared.get_json()["footprint"], before)

    def test_admin_override_validation(self):
        negative = self.client.put("/admin/products/laptop/override", json={"override_emission": -2})
        self.assertEqual(negative.status_code, 400)
        self.assertEqual(negative.get_json()["error"], "validation_error")

        missing = self.client.put("/admin/products/laptop/override", json={})
        self.assertEqual(missing.status_code, 400)

        not_a_number = self.client.put("/admin/products/laptop/override", json={"override_emission": "abc"})
        self.assertEqual(not_a_number.status_code, 400)

        unknown = self.client.put("/admin/products/nope/override", json={"override_emission": 1})
        self.assertEqual(unknown.status_code, 404)

        self.assertIsNone(self.store.get_product("laptop").override_emission)

    def test_export_csv(self):
        response = self.client.get("/admin/export.csv")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.mimetype.startswith("text/csv"))
        self.assertIn("products_carbon_footprint.csv", response.headers["Content-Disposition"])

        rows = list(csv.reader(io.StringIO(response.get_data(as_text=True))))
        self.assertEqual(rows[0][0], "name")
        self.assertEqual(len(rows), 4)

    def test_export_json(self):
        response = self.client.get("/admin/export.json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.mimetype, "application/json")
        records = json.loads(response.get_data(as_text=True))
        self.assertEqual(len(records), 3)
        self.assertIn("footprint", records[0])

    def test_cart_flow(self):
        self.assertEqual(self.client.get("/cart").get_json()["total_items"], 0)

        response = self.client.post("/cart/items", json={"product_id": "oil", "quantity": 2})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["total_items"], 2)

        self.client.post("/cart/items", json={"product_id": "laptop"})
        self.client.post("/cart/items/oil/increase")
        cart = self.client.post("/cart/items/laptop/decrease").get_json()
        self.assertEqual(cart["total_items"], 3)
        self.assertEqual([item["product_id"] for item in cart["items"]], ["oil"])
        self.assertEqual(cart["total_price"], 1049.7)

        cart = self.client.delete("/cart/items/oil").get_json()
        self.assertEqual(cart["total_items"], 0)

        self.client.post("/cart/items", json={"product_id": "oil"})
        cart = self.client.delete("/cart").get_json()
        self.assertEqual(cart["items"], [])

    def test_cart_errors(self):
        out_of_stock = self.client.post("/cart/items", json={"product_id": "bottle"})
        self.assertEqual(out_of_stock.status_code, 409)
        self.assertEqual(out_of_stock.get_json()["error"], "out_of_stock")

        missing_id = self.client.post("/cart/items", json={})
        self.assertEqual(missing_id.status_code, 400)

        bad_quantity = self.client.post("/cart/items", json={"product_id": "oil", "quantity": 0})
        self.assertEqual(bad_quantity.status_code, 400)

        unknown = self.client.post("/cart/items", json={"product_id": "nope"})
        self.assertEqual(unknown.status_code, 404)

    def test_cart_rejects_non_integer_quantity(self):
        for bad_quantity in (2.9, 2.0, "2", True, None):
            response = self.client.post("/cart/items", json={"product_id": "oil", "quantity": bad_quantity})
            self.assertEqual(response.status_code, 400, bad_quantity)
            self.assertEqual(response.get_json()["error"], "validation_error")
        self.assertEqual(self.client.get("/cart").get_json()["total_items"], 0)

    def test_cart_session_keeps_ids_and_quantities_only(self):
        self.client.post("/cart/items", json={"product_id": "oil", "quantity": 2})
        self.client.post("/cart/items", json={"product_id": "laptop"})

        with self.client.session_transaction() as flask_session:
            self.assertEqual(flask_session["cart"], [["oil", 2], ["laptop", 1]])

        # name and price are read back from the catalog
        self.store.seed([dict(TEST_PRODUCTS[1], price=10.0)])
        cart = self.client.get("/cart").get_json()
        self.assertEqual(cart["items"][0]["name"], "Olive Oil")
        self.assertEqual(cart["items"][0]["subtotal"], 20.0)
        self.assertEqual(cart["total_price"], 33019.0)

    def test_labels_follow_configured_locale(self):
        with mock.patch.object(app_module, "FOOTPRINT_LOCALE", "tr"):
            laptop = self.client.get("/products/laptop").get_json()
            rows = list(csv.reader(io.StringIO(self.client.get("/admin/export.csv").get_data(as_text=True))))

        self.assertEqual(laptop["footprint"]["label"], "Orta")
        self.assertEqual(rows[1][rows[0].index("footprint_label")], "Orta")


if __name__ == "__main__":
    unittest.main()
