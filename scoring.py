# This is scoring.py
import logging
import math

from config import (
    CATEGORY_MULTIPLIERS,
    DEFAULT_CATEGORY_MULTIPLIER,
    DOMESTIC_COUNTRY,
    DOMESTIC_SHIPPING_FACTOR,
    SHIPPING_FACTORS,
    DEFAULT_SHIPPING_FACTOR,
    COUNTRY_ALIASES,
    PACKAGING_FACTORS,
    DEFAULT_PACKAGING_FACTOR,
    WEIGHT_FACTOR_PER_KG,
    MIN_WEIGHT_KG,
    SCORE_REFERENCE_MAX,
    LOW_SCORE_MAX,
    MEDIUM_SCORE_MAX,
)
from models import (
    Breakdown,
    Category,
    FootprintLabel,
    FootprintResult,
    PackagingType,
    Product,
    is_valid_override,
)

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 10


def clamp(value: float, lower_bound: float, upper_bound: float) -> float:
    """
    Restrict `value` to stay within [lower_bound, upper_bound].
    """
    return max(lower_bound, min(upper_bound, value))


def finite_or(value: float, default: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def category_multiplier(category) -> float:
    return CATEGORY_MULTIPLIERS.get(Category.parse(category).value, DEFAULT_CATEGORY_MULTIPLIER)


def resolve_country_code(origin_country: str) -> str:
    """
    Normalize a free-text origin ("china", " Türkiye ", "cn") to an
    upper-case ISO alpha-2 code where we know one; otherwise return the
    upper-cased text unchanged.
    """
    normalized_origin = str(origin_country or "").strip().upper()
    return COUNTRY_ALIASES.get(normalized_origin, normalized_origin)


def shipping_factor(origin_country: str) -> float:
    """
    Map an origin to its per-unit shipping emission (kgCO2e).

    Domestic origin -> DOMESTIC_SHIPPING_FACTOR
    Known foreign   -> SHIPPING_FACTORS[code]
    Anything else   -> DEFAULT_SHIPPING_FACTOR ("unknown origin")
    """
    country_code = resolve_country_code(origin_country)
    if country_code == DOMESTIC_COUNTRY:
        return DOMESTIC_SHIPPING_FACTOR
    if country_code in SHIPPING_FACTORS:
        return SHIPPING_FACTORS[country_code]
    logger.debug("Unmapped origin %r, using default shipping factor", origin_country)
    return DEFAULT_SHIPPING_FACTOR


def packaging_factor(packaging_type) -> float:
    packaging = PackagingType.parse(packaging_type)
    if packaging.value not in PACKAGING_FACTORS:
        logger.debug("Unmapped packaging %r, using default packaging factor", packaging_type)
    return PACKAGING_FACTORS.get(packaging.value, DEFAULT_PACKAGING_FACTOR)


def compute_breakdown(product: Product) -> Breakdown:
    """
    Split the pre-override footprint of one unit into its four components.

    production = max(0, base_production_emission) * category multiplier
    shipping   = origin factor (default bucket for unknown origins)
    packaging  = packaging factor (default bucket for unknown types)
    weight     = max(weight_kg, MIN_WEIGHT_KG) * WEIGHT_FACTOR_PER_KG

    Malformed numbers are clamped instead of rejected so this never raises.
    """
    base_emission = max(0.0, finite_or(product.base_production_emission, 0.0))
    weight_kg = max(MIN_WEIGHT_KG, finite_or(product.weight_kg, MIN_WEIGHT_KG))

    return Breakdown(
        production=base_emission * category_multiplier(product.category),
        shipping=shipping_factor(product.origin_country),
        packaging=packaging_factor(product.packaging_type),
        weight=weight_kg * WEIGHT_FACTOR_PER_KG,
    )


def score_from_emission(kg_co2e: float, reference_max: float = SCORE_REFERENCE_MAX) -> int:
    """
    Convert an emission total (kgCO2e) into the 1–10 footprint score.

    Linear, saturating map:
        score = 1 + 9 * min(kg_co2e, reference_max) / reference_max

    rounded half-up and clamped to [1, 10]. 0 kgCO2e -> 1, reference_max or
    more -> 10. Lower is better.
    """
    if reference_max <= 0:  # Prevent divide-by-zero
        return MAX_SCORE

    clamped_emission = clamp(finite_or(kg_co2e, 0.0), 0.0, reference_max)
    raw_score = MIN_SCORE + (MAX_SCORE - MIN_SCORE) * clamped_emission / reference_max
    return int(clamp(math.floor(raw_score + 0.5), MIN_SCORE, MAX_SCORE))


def map_label(score: int) -> FootprintLabel:
    """
    Convert a 1–10 score into its label bucket.

    Grading scale:
      1–3   → Low
      4–7   → Medium
      8–10  → High
    """
    if score <= LOW_SCORE_MAX:
        return FootprintLabel.LOW
    if score <= MEDIUM_SCORE_MAX:
        return FootprintLabel.MEDIUM
    return FootprintLabel.HIGH


def estimate(product: Product) -> FootprintResult:
    """
    Compute the footprint of one product. Pure and total: same Product in,
    identical FootprintResult out, and no input makes it raise.

    Process:
        1. Compute the four breakdown components.
        2. Headline emission is the breakdown total, or the admin override when
           one is set (finite and >= 0).
        3. Score and label are derived from the headline emission, so an
           override moves them too. The breakdown is left as computed.
    """
    breakdown = compute_breakdown(product)

    headline_emission = breakdown.total
    overridden = False
    if product.override_emission is not None:
        if is_valid_override(product.override_emission):
            headline_emission = float(product.override_emission)
            overridden = True
        else:
            logger.warning(
                "Ignoring invalid override_emission %r on product %s",
                product.override_emission,
                product.id,
            )

    score = score_from_emission(headline_emission)

    return FootprintResult(
        score=score,
        label=map_label(score),
        estimated_kgco2e=headline_emission,
        breakdown=breakdown,
        overridden=overridden,
    )
