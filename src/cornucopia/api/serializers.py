"""
Serializers for converting game objects to JSON-safe dicts.
"""

from __future__ import annotations

from typing import Any

from cornucopia.api.sessions import GameSession
from cornucopia.core.tribute import Tribute


def serialize_game(session: GameSession, detail: bool = False) -> dict[str, Any]:
    """Session summary; ``detail`` adds the config and active hazard."""
    state = session.state
    data: dict[str, Any] = {
        "id": session.id,
        "name": session.name,
        "status": session.status,
        "day": state.day,
        "phase": state.phase.value,
        "weather": state.weather.value,
        "survivors": state.survivor_count,
        "tribute_count": len(state.tributes),
        "steps": session.steps,
        "winner_id": state.winner_id,
        "pending_deceased": len(state.deceased_queue),
    }
    if detail:
        data["config"] = state.config.to_dict()
        data["active_hazard"] = state.active_hazard.to_dict() if state.active_hazard else None
    return data


def serialize_tribute_summary(tribute: Tribute) -> dict[str, Any]:
    """Lightweight tribute summary for list views."""
    return {
        "id": tribute.id,
        "name": tribute.name,
        "district": tribute.district.value,
        "gender": tribute.gender.value,
        "age": tribute.age,
        "is_alive": tribute.is_alive,
        "health": round(float(tribute.health), 2),
        "hunger": round(float(tribute.hunger), 2),
        "thirst": round(float(tribute.thirst), 2),
        "stamina": round(float(tribute.stamina), 2),
        "kills": tribute.kills,
        "hype": tribute.hype,
        "location": list(tribute.location),
        "status_effects": [e.value for e in tribute.status_effects],
        "last_action": tribute.last_action,
        "cause_of_death": tribute.cause_of_death,
    }


def serialize_tribute_detail(tribute: Tribute) -> dict[str, Any]:
    """Full tribute detail, including inventory and relationships."""
    data = serialize_tribute_summary(tribute)
    data.update({
        "stats": tribute.stats.to_dict(),
        "inventory": [item.to_dict() for item in tribute.inventory],
        "last_location": list(tribute.last_location) if tribute.last_location else None,
        "relationships": {
            other_id: {"trust": rel.trust, "type": rel.type.value}
            for other_id, rel in tribute.relationships.items()
        },
        "last_attacker_id": tribute.last_attacker_id,
    })
    return data
