"""Assemble a complete EvidenceInventory from raw evidence items.

Runs the evidence engine stages in dependency order:
1. Coverage by pillar, regulation and framework
2. Gaps against the supplied requirements (linked to exposure signals, if given)
3. The readiness snapshot over the assembled coverage
"""

from collections.abc import Sequence
from datetime import datetime

from esg_risk_radar.core.models import (
    EvidenceInventory,
    EvidenceItem,
    EvidenceRequirement,
    ExposureSignal,
    InventoryCoverage,
    TrendPoint,
)
from esg_risk_radar.core.timeutil import resolve_now, to_iso
from esg_risk_radar.evidence.coverage import (
    calculate_coverage_by_framework,
    calculate_coverage_by_pillar,
    calculate_coverage_by_regulation,
)
from esg_risk_radar.evidence.gaps import identify_gaps
from esg_risk_radar.evidence.readiness import calculate_readiness
from esg_risk_radar.observability import get_logger

logger = get_logger(__name__)


def build_evidence_inventory(
    organization_id: str,
    items: Sequence[EvidenceItem],
    requirements: Sequence[EvidenceRequirement] | None = None,
    risk_signals: Sequence[ExposureSignal] | None = None,
    *,
    history: Sequence[TrendPoint] | None = None,
    now: datetime | None = None,
) -> EvidenceInventory:
    """Build an inventory with coverage, gaps and readiness filled in.

    Args:
        organization_id: Owning organisation.
        items: The organisation's evidence items.
        requirements: Evidence requirements to diff against. None = no requirement gaps.
        risk_signals: Exposure signals used to link requirement gaps.
        history: Recorded readiness scores for the trend series.
        now: Reference time for every derived timestamp.

    Returns:
        A fully derived EvidenceInventory.
    """
    moment = resolve_now(now)
    required = list(requirements or ())

    coverage = InventoryCoverage(
        by_pillar=calculate_coverage_by_pillar(items),
        by_regulation=calculate_coverage_by_regulation(items),
        by_framework=calculate_coverage_by_framework(items),
    )
    inventory = EvidenceInventory(
        organization_id=organization_id,
        last_updated=to_iso(moment),
        items=list(items),
        coverage=coverage,
    )

    gaps = identify_gaps(inventory, required, risk_signals, now=moment)
    readiness = calculate_readiness(inventory, required, history=history, now=moment)

    logger.info(
        "Evidence inventory built",
        organization_id=organization_id,
        item_count=len(items),
        gap_count=len(gaps),
        overall_readiness=readiness.overall,
    )

    return inventory.model_copy(update={"gaps": gaps, "readiness": readiness})
