"""
Monthly hosting cost from video duration. The only place cost is computed: upload creation,
full-form submit, public submit and the pricing preview endpoint all call monthly_cost().

First FREE_MINUTES are free; the rest is split into BLOCK_MINUTES blocks, a started block
counts as a full one, each block costs BLOCK_FEE.
"""
from dataclasses import dataclass

FREE_MINUTES = 70
BLOCK_MINUTES = 70
BLOCK_FEE = 1000


@dataclass(frozen=True)
class PriceQuote:
    duration_minutes: int
    free_minutes: int
    block_minutes: int
    block_fee: int
    extra_blocks: int
    monthly_cost: int


def _normalize(duration: int | None) -> int:
    if not duration or duration < 0:
        return 0
    return int(duration)


def extra_blocks(
    duration: int | None,
    *,
    free_minutes: int = FREE_MINUTES,
    block_minutes: int = BLOCK_MINUTES,
) -> int:
    """Number of paid blocks beyond the free allowance (ceiling division)."""
    excess = max(0, _normalize(duration) - free_minutes)
    return -(-excess // block_minutes)


def monthly_cost(
    duration: int | None,
    *,
    free_minutes: int = FREE_MINUTES,
    block_minutes: int = BLOCK_MINUTES,
    block_fee: int = BLOCK_FEE,
) -> int:
    return extra_blocks(duration, free_minutes=free_minutes, block_minutes=block_minutes) * block_fee


def quote(
    duration: int | None,
    *,
    free_minutes: int = FREE_MINUTES,
    block_minutes: int = BLOCK_MINUTES,
    block_fee: int = BLOCK_FEE,
) -> PriceQuote:
    blocks = extra_blocks(duration, free_minutes=free_minutes, block_minutes=block_minutes)
    return PriceQuote(
        duration_minutes=_normalize(duration),
        free_minutes=free_minutes,
        block_minutes=block_minutes,
        block_fee=block_fee,
        extra_blocks=blocks,
        monthly_cost=blocks * block_fee,
    )


def monthly_cost_from_settings(duration: int | None, settings) -> int:
    """monthly_cost() with the pricing overrides from Settings."""
    return monthly_cost(
        duration,
        free_minutes=settings.pricing_free_minutes,
        block_minutes=settings.pricing_block_minutes,
        block_fee=settings.pricing_block_fee,
    )


def quote_from_settings(duration: int | None, settings) -> PriceQuote:
    return quote(
        duration,
        free_minutes=settings.pricing_free_minutes,
        block_minutes=settings.pricing_block_minutes,
        block_fee=settings.pricing_block_fee,
    )
