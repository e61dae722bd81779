"""Export hash utility.

Fingerprints render plan inputs so a stored export can be checked against
the current settings. This is change detection, not a cryptographic digest.
"""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import TYPE_CHECKING

from .plan import RenderPlanInput

if TYPE_CHECKING:
    from ..scene.records import ExportRecord

_HASH_SEED = 5381
_HASH_MASK = 0xFFFFFFFF


def _canonical_number(value: float) -> str:
    """Format a number the way JavaScript's JSON.stringify does.

    Shortest round-trip digits, plain notation for magnitudes in
    [1e-6, 1e21), exponent notation ("1e-7", "1.5e+300") outside it.
    Integral floats have no fraction, so 50 and 50.0 agree. Non-finite
    values are "null".
    """
    value = float(value)
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = k + exponent  # decimal point position

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{sign}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def _canonical_text(plan_input: RenderPlanInput) -> str:
    """Encode the normalized inputs as compact JSON in a fixed order."""
    values = [
        _canonical_number(plan_input.resolved_fov()),
        _canonical_number(plan_input.pitch),
        _canonical_number(plan_input.camera_z),
        json.dumps(plan_input.resolved_shadow_enabled()),
        json.dumps(plan_input.resolved_occlusion_enabled()),
    ]
    return "[" + ",".join(values) + "]"


def _djb2_xor(text: str) -> int:
    h = _HASH_SEED
    for char in text:
        h = ((h * 33) ^ ord(char)) & _HASH_MASK
    return h


def create_export_hash(plan_input: RenderPlanInput) -> str:
    """Create a deterministic 8-char hex hash from render plan input.

    Optional fields get the same defaults as create_render_plan(), so an
    omitted field and its explicit default hash identically.

    Args:
        plan_input: Render parameters

    Returns:
        Lowercase hex string, zero-padded to 8 characters
    """
    return f"{_djb2_xor(_canonical_text(plan_input)):08x}"


def is_export_stale(export: ExportRecord, plan_input: RenderPlanInput) -> bool:
    """Check whether an export was rendered with different settings."""
    return export.render_settings_hash != create_export_hash(plan_input)
