"""
Security gate: admission decisions over registry trust levels.

The module-level functions are pure:

    admits(level, policy_level)        -> bool
    merge(a, b=None)                   -> most restrictive TrustLevel
    evaluate(assessment, policy)       -> SecurityVerdict(overall, admitted)

SecurityGate binds a normalized SecurityPolicy to a TrustRegistry so callers
can build a fresh TrustAssessment for an action (and the page that linked
to it) right before every admission decision.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, Optional

from actiongate.protocol.enums import SecurityLevel, TrustDomain, TrustLevel
from actiongate.protocol.models import (
    PolicyInput,
    SecurityPolicy,
    SecurityVerdict,
    TrustAssessment,
)
from actiongate.utils.interstitial import is_interstitial

from .registry import TrustRegistry

logger = logging.getLogger("actiongate.security")


# Every (level, policy) pair is decided by this table.
_ADMITTED_LEVELS: Dict[SecurityLevel, FrozenSet[TrustLevel]] = {
    SecurityLevel.ONLY_TRUSTED: frozenset({TrustLevel.TRUSTED}),
    SecurityLevel.NON_MALICIOUS: frozenset({TrustLevel.TRUSTED, TrustLevel.UNKNOWN}),
    SecurityLevel.ALL: frozenset(TrustLevel),
}


def admits(level: TrustLevel, policy_level: SecurityLevel) -> bool:
    try:
        allowed = _ADMITTED_LEVELS[SecurityLevel(policy_level)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported security level: {policy_level!r}") from None
    return TrustLevel(level) in allowed


def merge(a: TrustLevel, b: Optional[TrustLevel] = None) -> TrustLevel:
    if b is None:
        return a
    return a if a.rank >= b.rank else b


def merge_all(*levels: TrustLevel) -> TrustLevel:
    """Fold any number of levels; no levels at all counts as trusted."""
    result = TrustLevel.TRUSTED
    for level in levels:
        result = merge(result, level)
    return result


def evaluate(assessment: TrustAssessment, policy: SecurityPolicy) -> SecurityVerdict:
    """
    overall  = merge(action, origin)
    admitted = action admitted under policy.actions
               AND (no origin OR origin admitted under its own domain policy)
    """
    overall = merge(assessment.action, assessment.origin)

    action_ok = admits(assessment.action, policy.actions)
    origin_ok = True
    if assessment.origin is not None:
        domain = assessment.origin_domain or TrustDomain.WEBSITES
        origin_ok = admits(assessment.origin, policy.for_domain(domain))

    return SecurityVerdict(overall=overall, admitted=action_ok and origin_ok)


class SecurityGate:
    """
    Policy + registry binding used by controllers and the orchestrator.
    """

    def __init__(
        self,
        policy: PolicyInput = None,
        registry: Optional[TrustRegistry] = None,
    ) -> None:
        if policy is None:
            from .settings import get_settings

            policy = get_settings().security.level
        self.policy = SecurityPolicy.normalize(policy)
        self.registry = registry or TrustRegistry.get_instance()

    def assess(self, action_url: str, website_url: Optional[str] = None) -> TrustAssessment:
        """
        Read current classifications for an action and its origin.

        The origin is the interstitial wrapper when website_url decodes as
        one, the website otherwise, and absent for direct action links.
        """
        action_level = self.registry.action_state(action_url)
        if not website_url:
            return TrustAssessment(action=action_level)

        if is_interstitial(website_url).is_interstitial:
            return TrustAssessment(
                action=action_level,
                origin=self.registry.interstitial_state(website_url),
                origin_domain=TrustDomain.INTERSTITIALS,
            )

        return TrustAssessment(
            action=action_level,
            origin=self.registry.website_state(website_url),
            origin_domain=TrustDomain.WEBSITES,
        )

    def evaluate(self, assessment: TrustAssessment) -> SecurityVerdict:
        verdict = evaluate(assessment, self.policy)
        logger.debug(
            "Evaluated action=%s origin=%s (%s) -> overall=%s admitted=%s",
            assessment.action.value,
            assessment.origin.value if assessment.origin else None,
            assessment.origin_domain.value if assessment.origin_domain else None,
            verdict.overall.value,
            verdict.admitted,
        )
        return verdict

    def check(self, domain: TrustDomain, identifier: str) -> bool:
        """Single-domain admission of one identifier."""
        level = self.registry.classify(domain, identifier)
        return admits(level, self.policy.for_domain(domain))
