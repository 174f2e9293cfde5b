# app.py
import logging

from flask import Flask, request, jsonify, session, Response
from flask_cors import CORS

from cart import Cart, OutOfStockError
from catalog import CatalogStore, InvalidOverrideError, ProductNotFoundError
from config import SECRET_KEY, FOOTPRINT_LOCALE, LOG_LEVEL
from db import init_db, SessionLocal
from export import CSV_FILENAME, JSON_FILENAME, product_with_footprint, to_csv, to_json
from models import ProductFilter
from scoring import estimate
from seed_data import SEED_PRODUCTS

app = Flask(__name__)
app.config["SECRET_KEY"] = SECRET_KEY
CORS(app, supports_credentials=True)

# Ensure tables exist on startup and load the static catalog into an empty DB
init_db()
store = CatalogStore(SessionLocal)
store.seed_if_empty(SEED_PRODUCTS)


def serialize_product(product):
    """Product fields plus a freshly estimated `footprint` object."""
    return product_with_footprint(product, estimate(product), FOOTPRINT_LOCALE)


def validation_error(details):
    return jsonify({"error": "validation_error", "details": details}), 400


@app.errorhandler(ProductNotFoundError)
def handle_product_not_found(error):
    return jsonify({"error": "not_found", "details": [str(error)]}), 404


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"ok": True}), 200


@app.route("/products", methods=["GET"])
def list_products():
    """
    GET /products?search=&category=&footprint=&sort=

    Query params (all optional):
      search    : case-insensitive substring of the product name
      category  : one of the catalog categories
      footprint : score range "min-max", e.g. "1-3" (Low), "4-7", "8-10"
      sort      : "footprint-asc" | "price-asc" | "name-asc"

    Response: list of products, each with a nested `footprint`:
      {"score": 4, "label": "Medium", "estimated_kgCO2e": 9.3,
       "breakdown": {"production": ..., "shipping": ..., "packaging": ..., "weight": ...},
       "overridden": false}
    """
    product_filter = ProductFilter.from_args(request.args)
    products = store.list_products(product_filter)
    return jsonify([serialize_product(product) for product in products]), 200


@app.route("/products/<product_id>", methods=["GET"])
def product_detail(product_id):
    product = store.get_product(product_id)
    return jsonify(serialize_product(product)), 200


@app.route("/categories", methods=["GET"])
def categories():
    return jsonify(store.get_categories()), 200


@app.route("/admin/products", methods=["GET"])
def admin_products():
    """
    GET /admin/products?category=

    Admin table rows. Same shape as /products; `override_emission` is part of
    every product record and `footprint.overridden` marks rows where it applies.
    """
    product_filter = ProductFilter.from_args({"category": request.args.get("category", "")})
    products = store.list_products(product_filter)
    return jsonify([serialize_product(product) for product in products]), 200


@app.route("/admin/products/<product_id>/override", methods=["PUT"])
def set_override(product_id):
    """
    PUT /admin/products/<id>/override

    Request body JSON:
      {"override_emission": 1.5}    -> set
      {"override_emission": null}   -> clear

    Returns the product with its recomputed footprint.
    """
    request_data = request.get_json(silent=True) or {}
    if "override_emission" not in request_data:
        return validation_error(["override_emission is required (use null to clear)."])

    raw_value = request_data["override_emission"]
    if raw_value is None or raw_value == "":
        override_value = None
    elif isinstance(raw_value, bool):
        return validation_error(["override_emission must be a number or null."])
    else:
        try:
            override_value = float(raw_value)
        except (TypeError, ValueError):
            return validation_error(["override_emission must be a number or null."])

    try:
        product = store.set_override(product_id, override_value)
    except InvalidOverrideError as error:
        return validation_error([str(error)])

    return jsonify(serialize_product(product)), 200


def scored_catalog():
    return [(product, estimate(product)) for product in store.list_products()]


@app.route("/admin/export.csv", methods=["GET"])
def export_csv():
    return Response(
        to_csv(scored_catalog(), FOOTPRINT_LOCALE),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={CSV_FILENAME}"},
    )


@app.route("/admin/export.json", methods=["GET"])
def export_json():
    return Response(
        to_json(scored_catalog(), FOOTPRINT_LOCALE),
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={JSON_FILENAME}"},
    )


# --- Cart (ids and quantities kept in the signed Flask session cookie) ---

def load_cart() -> Cart:
    return Cart.from_session(session.get("cart"), store.get_product)


def save_cart(cart: Cart):
    session["cart"] = cart.to_session()
    return jsonify(cart.to_dict()), 200


@app.route("/cart", methods=["GET"])
def get_cart():
    return jsonify(load_cart().to_dict()), 200


@app.route("/cart", methods=["DELETE"])
def clear_cart():
    cart = load_cart()
    cart.clear()
    return save_cart(cart)


@app.route("/cart/items", methods=["POST"])
def add_to_cart():
    """
    POST /cart/items

    Request body JSON: {"product_id": "p-001", "quantity": 1}   # quantity optional
    """
    request_data = request.get_json(silent=True) or {}
    product_id = str(request_data.get("product_id", "")).strip()
    if not product_id:
        return validation_error(["product_id is required."])

    quantity = request_data.get("quantity", 1)
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        return validation_error(["quantity must be an integer."])

    product = store.get_product(product_id)
    cart = load_cart()
    try:
        cart.add(product, quantity)
    except OutOfStockError as error:
        return jsonify({"error": "out_of_stock", "details": [str(error)]}), 409
    except ValueError as error:
        return validation_error([str(error)])
    return save_cart(cart)


@app.route("/cart/items/<product_id>/increase", methods=["POST"])
def increase_cart_item(product_id):
    cart = load_cart()
    cart.increase(product_id)
    return save_cart(cart)


@app.route("/cart/items/<product_id>/decrease", methods=["POST"])
def decrease_cart_item(product_id):
    cart = load_cart()
    cart.decrease(product_id)
    return save_cart(cart)


@app.route("/cart/items/<product_id>", methods=["DELETE"])
def remove_cart_item(product_id):
    cart = load_cart()
    cart.remove(product_id)
    return save_cart(cart)


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL)
    # NOTE: debug=True is ONLY for local dev; turn it off in prod
    app.run(host="0.0.0.0", port=5055, debug=True)
