"""Reward engine - tiered cashback on cumulative gifted value"""

from typing import Iterable, Tuple

from babylist_gateway.domain.models import RegistryItem, RewardProgress, RewardState, RewardTier
from babylist_gateway.utils.money import percent_of

TIER5_THRESHOLD_CENTS = 50_000  # €500
TIER10_THRESHOLD_CENTS = 100_000  # €1000

TIER_PERCENT = {
    RewardTier.NONE: 0,
    RewardTier.TIER5: 5,
    RewardTier.TIER10: 10,
}


def resolve_tier(value_cents: int) -> RewardTier:
    """
    Map cumulative gifted value to a reward tier.

    Bands:
    - below €500:        NONE
    - €500 to €999.99:   TIER5
    - €1000 and above:   TIER10
    """
    if value_cents >= TIER10_THRESHOLD_CENTS:
        return RewardTier.TIER10
    elif value_cents >= TIER5_THRESHOLD_CENTS:
        return RewardTier.TIER5
    else:
        return RewardTier.NONE


def tier_percent(tier: RewardTier) -> int:
    return TIER_PERCENT[tier]


def discount_cents(value_cents: int, tier: RewardTier) -> int:
    """Coupon value for a tier, rounded half-up to the cent"""
    return percent_of(value_cents, tier_percent(tier))


def progress_states(value_cents: int, tier: RewardTier) -> Tuple[RewardProgress, ...]:
    """
    Reward panel lines shown to the registry owner.

    Amounts to go may be negative once a threshold is passed; such lines are
    hidden. Only one "achieved" line is visible at a time: reaching tier 10
    hides the tier 5 achievement.
    """
    nothing_gifted = value_cents == 0
    percent = tier_percent(tier)

    return (
        RewardProgress(
            kind="tier5_hint",
            amount_cents=TIER5_THRESHOLD_CENTS,
            is_disabled=True,
            is_hidden=not nothing_gifted,
        ),
        RewardProgress(
            kind="tier10_hint",
            amount_cents=TIER10_THRESHOLD_CENTS,
            is_disabled=True,
            is_hidden=not nothing_gifted,
        ),
        RewardProgress(
            kind="tier5_remaining",
            amount_cents=TIER5_THRESHOLD_CENTS - value_cents,
            is_disabled=percent < 5,
            is_hidden=not (percent < 5 and not nothing_gifted),
        ),
        RewardProgress(
            kind="tier5_achieved",
            amount_cents=discount_cents(value_cents, RewardTier.TIER5),
            is_disabled=tier != RewardTier.TIER5,
            is_hidden=tier != RewardTier.TIER5,
        ),
        RewardProgress(
            kind="tier10_remaining",
            amount_cents=TIER10_THRESHOLD_CENTS - value_cents,
            is_disabled=percent < 10,
            is_hidden=not (percent < 10 and not nothing_gifted),
        ),
        RewardProgress(
            kind="tier10_achieved",
            amount_cents=discount_cents(value_cents, RewardTier.TIER10),
            is_disabled=tier != RewardTier.TIER10,
            is_hidden=tier != RewardTier.TIER10,
        ),
    )


def reward_eligible(items: Iterable[RegistryItem]) -> list:
    """Gifted items that participate in the reward program"""
    return [item for item in items if item.gifted and item.participates]


def cumulative_gifted_value(items: Iterable[RegistryItem]) -> int:
    return sum(item.line_total_cents for item in items)


def calculate_reward(items: Iterable[RegistryItem]) -> RewardState:
    """
    Main entry point: compute the reward state of a registry.

    Takes all enriched items; only gifted and participating lines count.
    """
    value = cumulative_gifted_value(reward_eligible(items))
    tier = resolve_tier(value)

    return RewardState(
        cumulative_gifted_cents=value,
        tier=tier,
        percent=tier_percent(tier),
        discount_cents=discount_cents(value, tier),
        progress=progress_states(value, tier),
    )
