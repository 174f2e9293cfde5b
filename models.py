# models.py
import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import List, Optional, Dict, Any

from config import LABEL_TRANSLATIONS


def to_float_maybe(value: Any, default: float = 0.0) -> float:
    """
    Try to convert `value` to float.
    If it fails, return `default` instead of raising.
    """
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def to_bool_maybe(value: Any, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "1", "yes", "y"}:
            return True
        if lowered in {"false", "0", "no", "n"}:
            return False
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    return default


def _enum_key(raw_value: Any) -> str:
    return str(raw_value or "").strip().lower().replace("-", "_").replace(" ", "_")


class Category(str, Enum):
    FOOD = "food"
    ELECTRONICS = "electronics"
    CLOTHING = "clothing"
    HOME = "home"
    PERSONAL_CARE = "personal_care"
    OTHER = "other"

    @classmethod
    def parse(cls, raw_value: Any) -> "Category":
        """Unknown or empty values land in the OTHER bucket."""
        if isinstance(raw_value, cls):
            return raw_value
        try:
            return cls(_enum_key(raw_value))
        except ValueError:
            return cls.OTHER

    @classmethod
    def lookup(cls, raw_value: Any) -> Optional["Category"]:
        """Strict variant of parse(): unknown values give None instead of OTHER."""
        if isinstance(raw_value, cls):
            return raw_value
        try:
            return cls(_enum_key(raw_value))
        except ValueError:
            return None


class PackagingType(str, Enum):
    PLASTIC = "plastic"
    CARDBOARD = "cardboard"
    GLASS = "glass"
    METAL = "metal"
    PAPER = "paper"
    NONE = "none"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw_value: Any) -> "PackagingType":
        if isinstance(raw_value, cls):
            return raw_value
        try:
            return cls(_enum_key(raw_value))
        except ValueError:
            return cls.UNKNOWN


class FootprintLabel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    def localized(self, locale: str = "en") -> str:
        translations = LABEL_TRANSLATIONS.get(locale) or LABEL_TRANSLATIONS["en"]
        return translations[self.value]


@dataclass
class Product:
    """
    Product is one catalog entry as seen by the storefront and the estimator.

    Fields:
      id                        : Opaque unique identifier.
      name / description        : Display text.
      price                     : Unit price (store currency).
      image_url                 : Product image for list/detail views.
      in_stock                  : Whether the product can be added to a cart.
      category                  : Closed Category enum (unknown -> OTHER).
      weight_kg                 : Shipping weight of one unit.
      origin_country            : ISO code or country name, shipping-distance proxy.
      packaging_type            : Closed PackagingType enum (unknown -> UNKNOWN).
      base_production_emission  : kgCO2e baseline for producing one unit.
      override_emission         : Optional admin-supplied kgCO2e that replaces the
                                  computed estimate for display and reporting.

    String values for category/packaging_type are coerced to their enums on
    construction so records coming from the database or a JSON body share one shape.
    """

    id: str
    name: str
    category: Category = Category.OTHER
    weight_kg: float = 0.0
    origin_country: str = ""
    packaging_type: PackagingType = PackagingType.UNKNOWN
    base_production_emission: float = 0.0
    override_emission: Optional[float] = None
    price: float = 0.0
    description: str = ""
    image_url: str = ""
    in_stock: bool = True

    def __post_init__(self):
        self.category = Category.parse(self.category)
        self.packaging_type = PackagingType.parse(self.packaging_type)

    @staticmethod
    def from_dict(raw_dict: Dict[str, Any]) -> "Product":
        """
        Safely construct a Product from an arbitrary dict (seed data, request.json).

        - Forces numeric-looking fields to float, with fallback defaults.
        - Strips id, name and origin_country.
        - A missing/empty override_emission becomes None; anything else is cast to float.
        """
        raw_override = raw_dict.get("override_emission")
        if raw_override is None or raw_override == "":
            override_emission = None
        else:
            override_emission = to_float_maybe(raw_override, default=math.nan)

        return Product(
            id=str(raw_dict.get("id", "")).strip(),
            name=str(raw_dict.get("name", "")).strip(),
            description=str(raw_dict.get("description", "") or ""),
            price=to_float_maybe(raw_dict.get("price", 0.0)),
            image_url=str(raw_dict.get("image_url", "") or ""),
            in_stock=to_bool_maybe(raw_dict.get("in_stock", True)),
            category=Category.parse(raw_dict.get("category")),
            weight_kg=to_float_maybe(raw_dict.get("weight_kg", 0.0)),
            origin_country=str(raw_dict.get("origin_country", "") or "").strip(),
            packaging_type=PackagingType.parse(raw_dict.get("packaging_type")),
            base_production_emission=to_float_maybe(raw_dict.get("base_production_emission", 0.0)),
            override_emission=override_emission,
        )

    def validate(self) -> List[str]:
        """
        Validate the fields a catalog write must get right.

        The estimator itself never needs this (it clamps and defaults), but the
        catalog refuses to store records that would only display nonsense.

        Returns:
            A list of human-readable error strings. Empty list means "valid".
        """
        error_messages: List[str] = []

        if not self.id:
            error_messages.append("id is required.")
        if not self.name:
            error_messages.append("name is required.")

        for numeric_field_name in ["price", "base_production_emission"]:
            numeric_value = getattr(self, numeric_field_name)
            if not math.isfinite(numeric_value) or numeric_value < 0:
                error_messages.append(f"{numeric_field_name} must be >= 0.")

        if not math.isfinite(self.weight_kg) or self.weight_kg <= 0:
            error_messages.append("weight_kg must be > 0.")

        if self.override_emission is not None and not is_valid_override(self.override_emission):
            error_messages.append("override_emission must be a finite number >= 0.")

        return error_messages

    def to_dict(self) -> Dict[str, Any]:
        product_dict = asdict(self)
        product_dict["category"] = self.category.value
        product_dict["packaging_type"] = self.packaging_type.value
        return product_dict


def is_valid_override(value: Any) -> bool:
    """An override is usable only when it is a finite, non-negative number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value >= 0


@dataclass(frozen=True)
class Breakdown:
    """Emission components in kgCO2e; all non-negative."""

    production: float
    shipping: float
    packaging: float
    weight: float

    @property
    def total(self) -> float:
        return self.production + self.shipping + self.packaging + self.weight

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class FootprintResult:
    """
    Derived footprint of one product; recomputed on every request, never stored.

    When `overridden` is True, `estimated_kgco2e` is the admin value and the
    breakdown keeps the computed components, so breakdown.total may differ from it.
    """

    score: int
    label: FootprintLabel
    estimated_kgco2e: float
    breakdown: Breakdown
    overridden: bool = False

    def to_dict(self, locale: str = "en") -> Dict[str, Any]:
        return {
            "score": self.score,
            "label": self.label.localized(locale),
            "estimated_kgCO2e": self.estimated_kgco2e,
            "breakdown": self.breakdown.to_dict(),
            "overridden": self.overridden,
        }


@dataclass
class ProductFilter:
    """
    List-view filter and sort options.

    footprint_range is an inclusive (min_score, max_score) pair, e.g. (1, 3) for "Low".
    sort_by is one of SORT_OPTIONS or None for catalog order.
    """

    search: str = ""
    category: Optional[Category] = None
    footprint_range: Optional[tuple] = None
    sort_by: Optional[str] = None

    SORT_OPTIONS = ("footprint-asc", "price-asc", "name-asc")

    @staticmethod
    def from_args(query_args: Dict[str, Any]) -> "ProductFilter":
        """
        Build a filter from query-string style args. Invalid pieces are dropped
        rather than rejected, the same way the storefront selects fall back to "all".
        """
        category = Category.lookup(query_args.get("category"))

        sort_by = query_args.get("sort") or None
        if sort_by not in ProductFilter.SORT_OPTIONS:
            sort_by = None

        return ProductFilter(
            search=str(query_args.get("search", "") or "").strip(),
            category=category,
            footprint_range=parse_footprint_range(query_args.get("footprint")),
            sort_by=sort_by,
        )


def parse_footprint_range(raw_range: Any) -> Optional[tuple]:
    """Parse "4-7" into (4, 7). Returns None for empty or malformed input."""
    if not raw_range:
        return None
    parts = str(raw_range).split("-")
    if len(parts) != 2:
        return None
    try:
        min_score, max_score = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if min_score > max_score:
        return None
    return min_score, max_score


@dataclass
class CartLine:
    product_id: str
    name: str
    price: float
    quantity: int = 1
    image_url: str = ""

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        line_dict = asdict(self)
        line_dict["subtotal"] = round(self.subtotal, 2)
        return line_dict
