# unit_registry/services/query.py
"""
Record query/filter layer.

Filter criteria are turned into a flat list of Constraint values by pure
builder functions. The store evaluates equality, null-presence and a single
ordering; substring and range constraints are applied afterwards by a linear
scan over whatever the store returned. A blank criterion adds no constraint.

Every operator can also be evaluated in memory (apply_constraints), which
gives the same result as pushing it down to the store.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

from unit_registry.constants import NO_PLATE
from unit_registry.schemas.asset import AssetFilter
from unit_registry.schemas.vehicle import VehicleFilter
from unit_registry.utils.logger import get_logger

logger = get_logger(__name__)


class Op(str, Enum):
    EQ = "=="
    IS_NULL = "is_null"
    NOT_NULL = "not_null"
    CONTAINS = "contains"       # case-insensitive substring
    GTE = ">="
    LTE = "<="
    ORDER_ASC = "asc"
    ORDER_DESC = "desc"


STORE_FILTERS = {Op.EQ, Op.IS_NULL, Op.NOT_NULL}
ORDERINGS = {Op.ORDER_ASC, Op.ORDER_DESC}


@dataclass(frozen=True)
class Constraint:
    field: str
    op: Op
    value: Any = None

    @property
    def is_ordering(self) -> bool:
        return self.op in ORDERINGS

    @property
    def pushdown(self) -> bool:
        return self.op in STORE_FILTERS or self.is_ordering


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def equal(field: str, value: Any) -> List[Constraint]:
    return [] if is_blank(value) else [Constraint(field, Op.EQ, value)]


def contains(field: str, value: Optional[str]) -> List[Constraint]:
    return [] if is_blank(value) else [Constraint(field, Op.CONTAINS, value.strip())]


def between(field: str, low: Any, high: Any) -> List[Constraint]:
    constraints = []
    if not is_blank(low):
        constraints.append(Constraint(field, Op.GTE, low))
    if not is_blank(high):
        constraints.append(Constraint(field, Op.LTE, high))
    return constraints


def presence(field: str, present: Optional[bool]) -> List[Constraint]:
    """Tri-state: None adds nothing, True requires a value, False requires NULL."""
    if present is None:
        return []
    return [Constraint(field, Op.NOT_NULL if present else Op.IS_NULL)]


# ── Builders ──────────────────────────────────────────────────────────────

def vehicle_constraints(criteria: VehicleFilter) -> List[Constraint]:
    """Vehicle search form -> constraints, newest registration first."""
    plate = NO_PLATE if criteria.has_no_plate else criteria.plate
    constraints = [Constraint("registration_number", Op.ORDER_DESC)]
    constraints += equal("registration_number", criteria.registration_number)
    constraints += equal("plate", plate.strip().upper() if plate else plate)
    for field in ("city", "vehicle_type", "state", "brand", "model", "bou_trv"):
        constraints += equal(field, getattr(criteria, field))
    constraints += equal("has_key", criteria.has_key)
    constraints += presence("release_date", criteria.is_released)
    constraints += between("inspection_date", criteria.inspection_from, criteria.inspection_to)
    constraints += between("release_date", criteria.release_from, criteria.release_to)
    return constraints


def asset_constraints(criteria: AssetFilter) -> List[Constraint]:
    constraints = [Constraint("created_at", Op.ORDER_DESC)]
    for field in ("general_tag", "local_tag", "sector", "asset_class", "conservation_state"):
        constraints += equal(field, getattr(criteria, field))
    constraints += contains("description", criteria.description)
    constraints += between("acquisition_date", criteria.acquisition_from, criteria.acquisition_to)
    constraints += between("net_value", criteria.min_value, criteria.max_value)
    return constraints


def vehicle_report_constraints(city: Optional[str], start: Optional[date],
                               end: Optional[date]) -> List[Constraint]:
    return (
        [Constraint("registration_number", Op.ORDER_DESC)]
        + equal("city", city)
        + between("inspection_date", start, end)
    )


def asset_report_constraints(sector: Optional[str], start: Optional[date],
                             end: Optional[date]) -> List[Constraint]:
    return (
        [Constraint("created_at", Op.ORDER_DESC)]
        + equal("sector", sector)
        + between("acquisition_date", start, end)
    )


# ── Evaluation ────────────────────────────────────────────────────────────

def split_constraints(constraints: Iterable[Constraint]) -> Tuple[List[Constraint], List[Constraint]]:
    """Separate what the store can evaluate from what must be scanned in memory."""
    pushed, remaining = [], []
    for constraint in constraints:
        (pushed if constraint.pushdown else remaining).append(constraint)
    if sum(1 for c in pushed if c.is_ordering) > 1:
        raise ValueError("Only one ordering can be pushed down to the store")
    return pushed, remaining


def matches(record: Any, constraint: Constraint) -> bool:
    value = getattr(record, constraint.field)
    op = constraint.op
    if op == Op.EQ:
        return value == constraint.value
    if op == Op.IS_NULL:
        return value is None
    if op == Op.NOT_NULL:
        return value is not None
    if op == Op.CONTAINS:
        return constraint.value.casefold() in (value or "").casefold()
    if value is None:
        return False
    if op == Op.GTE:
        return value >= constraint.value
    if op == Op.LTE:
        return value <= constraint.value
    raise ValueError(f"{op} is not a filter")


def _order(records: List[Any], ordering: Constraint) -> List[Any]:
    present = [r for r in records if getattr(r, ordering.field) is not None]
    missing = [r for r in records if getattr(r, ordering.field) is None]
    present.sort(key=lambda r: getattr(r, ordering.field), reverse=ordering.op == Op.ORDER_DESC)
    return present + missing


def apply_constraints(records: Iterable[Any], constraints: Iterable[Constraint]) -> List[Any]:
    """Evaluate constraints in memory: filter with a linear scan, then order."""
    constraints = list(constraints)
    filters = [c for c in constraints if not c.is_ordering]
    result = [r for r in records if all(matches(r, c) for c in filters)]
    for ordering in (c for c in constraints if c.is_ordering):
        result = _order(result, ordering)
    return result


def run_query(store, constraints: Iterable[Constraint]) -> List[Any]:
    """Fetch from the store with what it can evaluate, narrow the rest in memory."""
    pushed, remaining = split_constraints(constraints)
    records = store.find(pushed)
    result = apply_constraints(records, remaining)
    logger.debug(
        f"[QUERY] {store.collection}: {len(pushed)} pushed, {len(remaining)} in memory, "
        f"{len(records)} fetched -> {len(result)} matched"
    )
    return result
