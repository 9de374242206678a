# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
GMS Filter — Rendering Module
Public API for match visualisation.
"""

from gms_filter.modules.rendering.match_overlay import (
    draw_matches,
    save_match_overlay,
)

__all__ = [
    "draw_matches",
    "save_match_overlay",
]
