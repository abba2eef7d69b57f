"""
netkit._registry
─────────────────
Internal module registry: the single source of truth for which modules
exist and what each one exports.

Adding a new module:
  1. Implement it in the right tier
  2. Add ``__sdk_export__`` to the module (``exports``, ``description``,
     ``tier``, ``module``)
  3. Add one tuple to TIER_MODULES below
  4. Re-export the public names from ``netkit/__init__.py``
"""
from __future__ import annotations

import importlib
from typing import Any

# ---------------------------------------------------------------------------
# Ordered list of (tier_path, module_name) for all implemented modules.
# Lower tiers never import from higher ones.
# ---------------------------------------------------------------------------
TIER_MODULES: list[tuple[str, str]] = [
    # tier0_core: errors, settings, logging, HTTP primitives
    ("tier0_core", "errors"),
    ("tier0_core", "config"),
    ("tier0_core", "logging"),
    ("tier0_core", "http"),
    # tier1_runtime: pure helpers, no network I/O
    ("tier1_runtime", "serialize"),
    ("tier1_runtime", "urls"),
    # tier2_transport: network I/O
    ("tier2_transport", "client"),
    ("tier2_transport", "json_api"),
    ("tier2_transport", "files"),
]


def collect_exports() -> dict[str, list[str]]:
    """
    Import every registered module and return its declared exports.

    Returns:
        ``{"netkit.<tier>.<module>": [export names]}`` in TIER_MODULES order.

    Raises:
        LookupError: a module declares an export it does not define, or has
        no ``__sdk_export__`` at all.
    """
    exports: dict[str, list[str]] = {}

    for tier_path, module_name in TIER_MODULES:
        qualified = f"netkit.{tier_path}.{module_name}"
        mod = importlib.import_module(qualified)

        export_meta: dict[str, Any] | None = getattr(mod, "__sdk_export__", None)
        if not export_meta:
            raise LookupError(f"{qualified} has no __sdk_export__ declaration")

        missing = [name for name in export_meta["exports"] if not hasattr(mod, name)]
        if missing:
            raise LookupError(f"{qualified} declares undefined exports: {missing}")

        exports[qualified] = list(export_meta["exports"])

    return exports
