# config.py
import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///ekostore.db")
SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Locale for footprint labels in API responses and exports ("en" or "tr")
FOOTPRINT_LOCALE = os.getenv("FOOTPRINT_LOCALE", "en")

# Score normalization: linear map of kgCO2e onto 1..10, saturating at this value
SCORE_REFERENCE_MAX = float(os.getenv("SCORE_REFERENCE_MAX", "25"))

# Weight component
WEIGHT_FACTOR_PER_KG = float(os.getenv("WEIGHT_FACTOR_PER_KG", "0.5"))  # kgCO2e per kg
MIN_WEIGHT_KG = float(os.getenv("MIN_WEIGHT_KG", "0.001"))

# Production baseline multipliers per category (keys are Category values)
CATEGORY_MULTIPLIERS = {
    "electronics": 1.5,
    "clothing": 1.2,
    "home": 1.1,
    "food": 1.0,
    "personal_care": 1.0,
    "other": 1.0,
}
DEFAULT_CATEGORY_MULTIPLIER = 1.0

# Shipping: origin country (ISO alpha-2) -> kgCO2e per unit
DOMESTIC_COUNTRY = os.getenv("DOMESTIC_COUNTRY", "TR").upper()
DOMESTIC_SHIPPING_FACTOR = 0.3
SHIPPING_FACTORS = {
    # neighbouring / European
    "DE": 1.0, "FR": 1.0, "IT": 1.0, "ES": 1.0, "NL": 1.0, "GR": 1.0,
    "BG": 1.0, "PL": 1.0, "GB": 1.2, "PT": 1.2,
    # overseas
    "CN": 3.0, "JP": 3.0, "KR": 3.0, "VN": 3.0, "TW": 3.0,
    "IN": 2.5, "BD": 2.5, "US": 2.5, "CA": 2.5, "MX": 3.0,
    "BR": 3.5, "AU": 3.5, "NZ": 3.5,
}
DEFAULT_SHIPPING_FACTOR = float(os.getenv("DEFAULT_SHIPPING_FACTOR", "2.0"))

# Free-text origins seen in catalog data -> ISO alpha-2
COUNTRY_ALIASES = {
    "TURKEY": "TR", "TÜRKIYE": "TR", "TÜRKİYE": "TR", "TURKIYE": "TR",
    "GERMANY": "DE", "FRANCE": "FR", "ITALY": "IT", "SPAIN": "ES",
    "NETHERLANDS": "NL", "GREECE": "GR", "BULGARIA": "BG", "POLAND": "PL",
    "UNITED KINGDOM": "GB", "UK": "GB", "PORTUGAL": "PT",
    "CHINA": "CN", "JAPAN": "JP", "SOUTH KOREA": "KR", "KOREA": "KR",
    "VIETNAM": "VN", "TAIWAN": "TW", "INDIA": "IN", "BANGLADESH": "BD",
    "USA": "US", "UNITED STATES": "US", "CANADA": "CA", "MEXICO": "MX",
    "BRAZIL": "BR", "AUSTRALIA": "AU", "NEW ZEALAND": "NZ",
}

# Packaging: kgCO2e per unit (keys are PackagingType values)
PACKAGING_FACTORS = {
    "plastic": 0.5,
    "metal": 0.4,
    "glass": 0.35,
    "cardboard": 0.2,
    "paper": 0.1,
    "none": 0.0,
}
DEFAULT_PACKAGING_FACTOR = float(os.getenv("DEFAULT_PACKAGING_FACTOR", "0.3"))

# Label thresholds on the 1..10 score (inclusive upper bounds)
LOW_SCORE_MAX = 3
MEDIUM_SCORE_MAX = 7

LABEL_TRANSLATIONS = {
    "en": {"Low": "Low", "Medium": "Medium", "High": "High"},
    "tr": {"Low": "Düşük", "Medium": "Orta", "High": "Yüksek"},
}
