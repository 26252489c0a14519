"""Evidence gaps: required evidence that is missing, incomplete or expired.

Two kinds of gap are derived:
- Requirement gaps: a requirement with no matching evidence item, or whose
  matching items are all short of ``complete``. Matching is by regulation tag
  or by a framework tag contained in the requirement's regulation name.
- Expiry gaps: an item whose status is ``expired`` or whose ``expires_at``
  has passed. The date wins over the status: a ``complete`` item past its
  expiry date still produces a gap.

Gaps are ordered most urgent first with the shared severity ranking; gaps of
equal severity keep derivation order (requirement gaps, then expiry gaps).
"""

from collections.abc import Sequence
from datetime import datetime

from esg_risk_radar.core.models import (
    STATUS_COMPLETE,
    STATUS_EXPIRED,
    EvidenceGap,
    EvidenceInventory,
    EvidenceItem,
    EvidenceRequirement,
    ExposureSignal,
)
from esg_risk_radar.core.severity import sort_by_severity
from esg_risk_radar.core.timeutil import add_one_year, parse_timestamp, resolve_now, to_iso
from esg_risk_radar.observability import get_logger

logger = get_logger(__name__)

SEVERITY_MANDATORY_GAP = "high"
SEVERITY_OPTIONAL_GAP = "medium"
SEVERITY_EXPIRY_GAP = "medium"

# Only these requirement frequencies receive an automatic deadline
_FREQUENCY_ANNUAL = "annual"


def identify_gaps(
    inventory: EvidenceInventory,
    requirements: Sequence[EvidenceRequirement],
    risk_signals: Sequence[ExposureSignal] | None = None,
    *,
    now: datetime | None = None,
) -> list[EvidenceGap]:
    """Diff required evidence against the inventory.

    Args:
        inventory: The organisation's evidence inventory.
        requirements: Evidence requirements to check.
        risk_signals: Optional exposure signals; a requirement gap is linked to
            the first signal whose related_regulation equals the requirement's
            regulation.
        now: Reference time for expiry checks and annual deadlines.

    Returns:
        EvidenceGaps sorted most urgent first.
    """
    moment = resolve_now(now)
    gaps: list[EvidenceGap] = []

    for requirement in requirements:
        matches = [item for item in inventory.items if _matches_requirement(item, requirement)]
        if any(item.status == STATUS_COMPLETE for item in matches):
            continue
        gaps.append(_requirement_gap(requirement, risk_signals, moment))

    requirement_gap_count = len(gaps)

    for item in inventory.items:
        if _is_expired(item, moment):
            gaps.append(_expiry_gap(item))

    logger.debug(
        "Evidence gaps identified",
        organization_id=inventory.organization_id,
        requirement_count=len(requirements),
        requirement_gaps=requirement_gap_count,
        expiry_gaps=len(gaps) - requirement_gap_count,
        linked_signal_count=len(risk_signals or ()),
    )

    return sort_by_severity(gaps, key=lambda gap: gap.severity)


def map_evidence_to_requirements(
    evidence: Sequence[EvidenceItem],
    requirements: Sequence[EvidenceRequirement],
) -> dict[str, list[EvidenceItem]]:
    """Map each requirement id to the evidence items that may support it.

    Matching is looser than gap detection: an item also matches when its
    category equals the requirement's pillar.

    Args:
        evidence: Evidence items to distribute.
        requirements: Requirements to map onto.

    Returns:
        Mapping of requirement id to matching items, in requirement order.
        Requirements without any match are omitted.
    """
    mapping: dict[str, list[EvidenceItem]] = {}
    for requirement in requirements:
        matches = [
            item
            for item in evidence
            if _matches_requirement(item, requirement) or item.category == requirement.category
        ]
        if matches:
            mapping[requirement.id] = matches
    return mapping


def filter_applicable_requirements(
    requirements: Sequence[EvidenceRequirement],
    *,
    sector: str | None = None,
    geographies: Sequence[str] | None = None,
    organization_size: str | None = None,
) -> list[EvidenceRequirement]:
    """Keep the requirements whose applicability filter admits the organisation.

    An empty filter list on a requirement admits everyone, and a criterion the
    caller leaves as None is not checked.

    Args:
        requirements: Candidate requirements.
        sector: The organisation's sector code.
        geographies: Geography codes the organisation operates in; any overlap admits.
        organization_size: The organisation's size class (e.g., "large").

    Returns:
        Applicable requirements, in input order.
    """
    applicable: list[EvidenceRequirement] = []
    for requirement in requirements:
        scope = requirement.applicable_to
        if sector is not None and scope.sectors and sector not in scope.sectors:
            continue
        if (
            geographies is not None
            and scope.geographies
            and not set(scope.geographies).intersection(geographies)
        ):
            continue
        if (
            organization_size is not None
            and scope.organization_size
            and organization_size not in scope.organization_size
        ):
            continue
        applicable.append(requirement)
    return applicable


def _matches_requirement(item: EvidenceItem, requirement: EvidenceRequirement) -> bool:
    """Return True if the item is tagged with the requirement's regulation or a framework in it."""
    if requirement.regulation in item.metadata.regulation:
        return True
    return any(fw and fw in requirement.regulation for fw in item.metadata.framework)


def _is_expired(item: EvidenceItem, moment: datetime) -> bool:
    if item.status == STATUS_EXPIRED:
        return True
    return item.expires_at is not None and parse_timestamp(item.expires_at) < moment


def _requirement_gap(
    requirement: EvidenceRequirement,
    risk_signals: Sequence[ExposureSignal] | None,
    moment: datetime,
) -> EvidenceGap:
    linked_signal = next(
        (s for s in risk_signals or () if s.related_regulation == requirement.regulation),
        None,
    )
    deadline = None
    if requirement.frequency == _FREQUENCY_ANNUAL:
        deadline = to_iso(add_one_year(moment))

    return EvidenceGap(
        id=f"gap-{requirement.id}",
        category=requirement.category,
        regulation=requirement.regulation,
        requirement=requirement.requirement,
        severity=SEVERITY_MANDATORY_GAP if requirement.mandatory else SEVERITY_OPTIONAL_GAP,
        description=f"Missing evidence for {requirement.requirement}",
        evidence_needed=list(requirement.evidence_types),
        deadline=deadline,
        linked_risk_signal=linked_signal.id if linked_signal else None,
    )


def _expiry_gap(item: EvidenceItem) -> EvidenceGap:
    return EvidenceGap(
        id=f"gap-expired-{item.id}",
        category=item.category,
        regulation=item.metadata.regulation[0] if item.metadata.regulation else None,
        framework=item.metadata.framework[0] if item.metadata.framework else None,
        requirement=f"Renew {item.title}",
        severity=SEVERITY_EXPIRY_GAP,
        description=f"Evidence expired: {item.title}",
        evidence_needed=[item.type],
        deadline=item.expires_at,
    )
