"""Single-category narrowing for embeddable (PSI) reports."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from reportmux.lhr import clone_result

if TYPE_CHECKING:
    from collections.abc import Mapping

    from reportmux.lhr import Result

PERFORMANCE_CATEGORY_ID = "performance"
BUDGET_AUDIT_ID = "performance-budget"
BUDGET_SUFFIX = "-budget"


def narrow_to_performance(result: Mapping[str, Any]) -> Result:
    """Drop everything but the performance category, and all budgets.

    Never fails: when ``performance`` is absent the returned category map
    holds ``{"performance": None}`` and callers must check for it. The input
    is not modified.
    """
    clone = clone_result(result)
    performance = clone.get("categories", {}).get(PERFORMANCE_CATEGORY_ID)
    clone["categories"] = {PERFORMANCE_CATEGORY_ID: performance}  # type: ignore[dict-item]

    # The embedded product has no budget feature.
    clone.get("audits", {}).pop(BUDGET_AUDIT_ID, None)
    if performance is not None:
        performance["auditRefs"] = [
            ref
            for ref in performance.get("auditRefs", [])
            if not ref.get("id", "").endswith(BUDGET_SUFFIX)
        ]
    return clone
