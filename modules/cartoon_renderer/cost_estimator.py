"""
Cost estimation for cartoon rendering.

Priced from the lookup table unless the provider reports its own breakdown.
"""
from decimal import Decimal, InvalidOperation
from typing import Any

from modules.cartoon_renderer.config import DEFAULT_RENDER_PRICING, RENDER_PRICING
from shared.models.character import CostBreakdown


def estimate_render_cost(model: str) -> CostBreakdown:
    """
    Estimate cost for one render with the given model.

    Unknown models are priced with the default table entry.
    """
    pricing = RENDER_PRICING.get(model, DEFAULT_RENDER_PRICING)
    return CostBreakdown(
        analysis=pricing["analysis"],
        generation=pricing["generation"],
        total=pricing["analysis"] + pricing["generation"],
    )


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValueError(f"Invalid cost value: {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid cost value: {value!r}") from e
    if not result.is_finite() or result < 0:
        raise ValueError(f"Invalid cost value: {value!r}")
    return result


def breakdown_from_payload(cost: Any) -> CostBreakdown:
    """
    Parse a provider-reported cost.

    Accepts a bare number (all of it generation cost) or an object with any
    of analysis/generation/total; a missing total is the sum of the parts.

    Raises:
        ValueError: If the cost cannot be interpreted
    """
    if isinstance(cost, dict):
        analysis = _to_decimal(cost.get("analysis", 0))
        generation = _to_decimal(cost.get("generation", 0))
        total = _to_decimal(cost["total"]) if "total" in cost else analysis + generation
        return CostBreakdown(analysis=analysis, generation=generation, total=total)

    total = _to_decimal(cost)
    return CostBreakdown(generation=total, total=total)
