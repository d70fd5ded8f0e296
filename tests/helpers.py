"""Builders for small in-memory exports used across the unit tests."""

from typing import Any


def alias(target_id: str) -> dict[str, str]:
    """Alias value as it appears in an export."""
    return {"type": "VARIABLE_ALIAS", "id": target_id}


def rgba(r: float, g: float, b: float, a: float = 1.0) -> dict[str, float]:
    return {"r": r, "g": g, "b": b, "a": a}


def make_export(
    variables: list[dict[str, Any]],
    *,
    collection_id: str = "c1",
    name: str = "Tokens",
    modes: list[tuple[str, str]] | None = None,
    default_mode_id: str | None = None,
) -> dict[str, Any]:
    """Single-collection export; variables need id, name, type and values."""
    modes = modes or [("m1", "Value")]
    return {
        "collections": [
            {
                "id": collection_id,
                "name": name,
                "modes": [{"modeId": mode_id, "name": mode_name} for mode_id, mode_name in modes],
                "defaultModeId": default_mode_id or modes[0][0],
                "variables": [
                    {
                        "id": var["id"],
                        "key": var.get("key", f"key-{var['id']}"),
                        "name": var["name"],
                        "resolvedType": var["type"],
                        "valuesByMode": var["values"],
                        "variableCollectionId": collection_id,
                        **({"description": var["description"]} if "description" in var else {}),
                    }
                    for var in variables
                ],
            }
        ]
    }
