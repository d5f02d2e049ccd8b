"""
Directed per-pair trust and hostility propagation.

Trust is the only stored quantity; the relationship category is derived
from it through fixed thresholds, so the two can never disagree.
"""

from __future__ import annotations

from cornucopia.core.tribute import (
    CAREER_DISTRICTS,
    FRIENDLY_TYPES,
    TRUST_MAX,
    TRUST_MIN,
    Relationship,
    Tribute,
    clamp,
)

# Starting trust between tributes from the same district.
DISTRICT_BOND_TRUST = 65
# Starting trust between career tributes when career alliances are on.
CAREER_ALLIANCE_TRUST = 25
# Trust lost by a victim's allies toward the attacker.
HOSTILITY_PENALTY = 30


def modify_trust(subject: Tribute, target_id: str, delta: float) -> Relationship:
    """Shift ``subject``'s trust toward ``target_id`` by ``delta``.

    Creates a Neutral relationship at trust 0 on first reference and
    clamps the result to [-100, 100].

    Returns:
        The updated relationship.
    """
    rel = subject.relationships.get(target_id)
    if rel is None:
        rel = Relationship()
        subject.relationships[target_id] = rel
    rel.trust = clamp(rel.trust + delta, TRUST_MIN, TRUST_MAX)
    return rel


def seed_relationships(tributes: list[Tribute], use_career_alliance: bool) -> None:
    """Set the opening trust between every ordered pair of tributes.

    Same-district tributes start at ``DISTRICT_BOND_TRUST``. Otherwise,
    when career alliances are enabled, two career tributes start at
    ``CAREER_ALLIANCE_TRUST``. Everyone else stays unrecorded (Neutral).
    """
    for t1 in tributes:
        for t2 in tributes:
            if t1.id == t2.id:
                continue
            initial = 0
            if t1.district == t2.district:
                initial = DISTRICT_BOND_TRUST
            elif (
                use_career_alliance
                and t1.district in CAREER_DISTRICTS
                and t2.district in CAREER_DISTRICTS
            ):
                initial = CAREER_ALLIANCE_TRUST
            if initial:
                modify_trust(t1, t2.id, initial)


def propagate_hostility(attacker_id: str, victim: Tribute, tributes: list[Tribute]) -> list[str]:
    """Turn the victim's living friends against the attacker.

    Every living tribute the victim regards as Ally, Close Ally or
    Soulmate loses ``HOSTILITY_PENALTY`` trust toward the attacker. Only
    the victim's direct friends are affected; nothing recurses.

    Returns:
        Ids of the tributes whose trust changed.
    """
    by_id = {t.id: t for t in tributes}
    affected: list[str] = []
    for other_id, rel in victim.relationships.items():
        if rel.type not in FRIENDLY_TYPES or other_id == attacker_id:
            continue
        ally = by_id.get(other_id)
        if ally is not None and ally.is_alive:
            modify_trust(ally, attacker_id, -HOSTILITY_PENALTY)
            affected.append(ally.id)
    return affected
