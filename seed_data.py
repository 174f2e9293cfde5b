# seed_data.py
# Static catalog loaded into an empty database on startup.

SEED_PRODUCTS = [
    {
        "id": "p-001",
        "name": "Organic Olive Oil 1L",
        "description": "Cold-pressed extra virgin olive oil from the Aegean coast.",
        "category": "food",
        "price": 349.90,
        "image_url": "https://images.unsplash.com/photo-1474979266404-7eaacbcd87c5",
        "in_stock": True,
        "weight_kg": 1.1,
        "origin_country": "TR",
        "packaging_type": "glass",
        "base_production_emission": 3.2,
    },
    {
        "id": "p-002",
        "name": "Bamboo Toothbrush",
        "description": "Biodegradable handle, plant-based bristles.",
        "category": "personal_care",
        "price": 59.90,
        "image_url": "https://images.unsplash.com/photo-1607613009820-a29f7bb81c04",
        "in_stock": True,
        "weight_kg": 0.02,
        "origin_country": "CN",
        "packaging_type": "paper",
        "base_production_emission": 0.1,
    },
    {
        "id": "p-003",
        "name": "Refurbished Smartphone",
        "description": "Certified refurbished handset with a new battery.",
        "category": "electronics",
        "price": 8999.00,
        "image_url": "https://images.unsplash.com/photo-1511707171634-5f897ff02aa9",
        "in_stock": True,
        "weight_kg": 0.4,
        "origin_country": "CN",
        "packaging_type": "cardboard",
        "base_production_emission": 14.0,
    },
    {
        "id": "p-004",
        "name": "Organic Cotton T-Shirt",
        "description": "GOTS-certified cotton, locally sewn.",
        "category": "clothing",
        "price": 399.00,
        "image_url": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab",
        "in_stock": True,
        "weight_kg": 0.2,
        "origin_country": "TR",
        "packaging_type": "paper",
        "base_production_emission": 2.1,
    },
    {
        "id": "p-005",
        "name": "Laptop 14\"",
        "description": "Energy-efficient ultrabook.",
        "category": "electronics",
        "price": 32999.00,
        "image_url": "https://images.unsplash.com/photo-1496181133206-80ce9b88a853",
        "in_stock": True,
        "weight_kg": 1.4,
        "origin_country": "TW",
        "packaging_type": "plastic",
        "base_production_emission": 18.0,
    },
    {
        "id": "p-006",
        "name": "Stainless Steel Water Bottle",
        "description": "Double-walled, keeps drinks cold for 24 hours.",
        "category": "home",
        "price": 449.00,
        "image_url": "https://images.unsplash.com/photo-1602143407151-7111542de6e8",
        "in_stock": False,
        "weight_kg": 0.35,
        "origin_country": "IN",
        "packaging_type": "cardboard",
        "base_production_emission": 2.5,
    },
    {
        "id": "p-007",
        "name": "Hazelnut Spread 400g",
        "description": "Black Sea hazelnuts, no palm oil.",
        "category": "food",
        "price": 159.90,
        "image_url": "https://images.unsplash.com/photo-1612187209234-3b5a57b5d4ff",
        "in_stock": True,
        "weight_kg": 0.45,
        "origin_country": "TR",
        "packaging_type": "glass",
        "base_production_emission": 1.4,
    },
    {
        "id": "p-008",
        "name": "Wool Winter Coat",
        "description": "Recycled wool blend coat.",
        "category": "clothing",
        "price": 2899.00,
        "image_url": "https://images.unsplash.com/photo-1539533018447-63fcce2678e3",
        "in_stock": True,
        "weight_kg": 1.6,
        "origin_country": "IT",
        "packaging_type": "plastic",
        "base_production_emission": 9.5,
    },
    {
        "id": "p-009",
        "name": "Beeswax Food Wraps",
        "description": "Reusable alternative to cling film, set of three.",
        "category": "home",
        "price": 189.00,
        "image_url": "https://images.unsplash.com/photo-1610701596007-11502861dcfa",
        "in_stock": True,
        "weight_kg": 0.08,
        "origin_country": "DE",
        "packaging_type": "none",
        "base_production_emission": 0.3,
    },
    {
        "id": "p-010",
        "name": "Solid Shampoo Bar",
        "description": "Plastic-free shampoo bar for all hair types.",
        "category": "personal_care",
        "price": 129.00,
        "image_url": "https://images.unsplash.com/photo-1600857544200-b2f666a9a2ec",
        "in_stock": True,
        "weight_kg": 0.1,
        "origin_country": "GB",
        "packaging_type": "paper",
        "base_production_emission": 0.4,
    },
]
