"""Effective policy resolution: custom registry entry vs hook-wide defaults."""

from .errors import MalformedPolicy
from .types import Defaults, EffectivePolicy, Policy, PolicySource


def resolve(custom: Policy, defaults: Defaults) -> EffectivePolicy:
    """
    Pick the policy the hook enforces for a trader.

    A custom entry replaces both limits at once; fields are never mixed with
    the defaults.
    """
    if not isinstance(custom, Policy):
        raise MalformedPolicy(f"custom policy must be a Policy, got {type(custom).__name__}")
    if not isinstance(defaults, Defaults):
        raise MalformedPolicy(f"defaults must be a Defaults, got {type(defaults).__name__}")

    if custom.exists:
        return EffectivePolicy(
            max_swap_abs=custom.max_swap_abs,
            cooldown_seconds=custom.cooldown_seconds,
            source=PolicySource.CUSTOM,
        )
    return EffectivePolicy(
        max_swap_abs=defaults.max_swap_abs,
        cooldown_seconds=defaults.cooldown_seconds,
        source=PolicySource.DEFAULTS,
    )
