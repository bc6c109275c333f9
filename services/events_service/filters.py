"""
Compose event filters into a single query transform.

Each supported filter field maps to a predicate builder. The table below is
walked once, in order, and every field that is present and non-empty adds
one ``query.where(...)`` step. Nothing here executes SQL: the result is a
function from ``Select`` to ``Select`` that the caller runs.

Free-text search binds the search string as a parameter of
``websearch_to_tsquery``; it is never spliced into SQL text.
"""

from functools import reduce
from typing import Any, Callable, Mapping, Union

from services.events_service.models import SEARCH_CONFIG, Event
from services.events_service.schemas import EventsFilter
from sqlalchemy import ColumnElement, Select, cast, func
from sqlalchemy.dialects.postgresql import REGCONFIG

QueryTransform = Callable[[Select], Select]
PredicateBuilder = Callable[[Any], ColumnElement[bool]]


def search_document(search: str) -> ColumnElement[bool]:
    """Match ``search`` against the stored text-search document."""
    query = func.websearch_to_tsquery(cast(SEARCH_CONFIG, REGCONFIG), search)
    return Event.document.bool_op("@@")(query)


# Evaluation order is the order of this table, not the order of the input
FILTER_PREDICATES: tuple[tuple[str, PredicateBuilder], ...] = (
    ("location", lambda value: Event.location == value),
    ("title", lambda value: Event.title == value),
    ("description", lambda value: Event.description == value),
    ("date", lambda value: Event.date == value),
    ("rsvp_end_date", lambda value: Event.rsvp_end_date == value),
    ("date_gt", lambda value: Event.date > value),
    ("date_gte", lambda value: Event.date >= value),
    ("date_lt", lambda value: Event.date < value),
    ("date_lte", lambda value: Event.date <= value),
    ("rsvp_end_date_gt", lambda value: Event.rsvp_end_date > value),
    ("rsvp_end_date_gte", lambda value: Event.rsvp_end_date >= value),
    ("rsvp_end_date_lt", lambda value: Event.rsvp_end_date < value),
    ("rsvp_end_date_lte", lambda value: Event.rsvp_end_date <= value),
    ("q", search_document),
)

FILTER_FIELDS = tuple(field for field, _ in FILTER_PREDICATES)


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def _where(predicate: ColumnElement[bool]) -> QueryTransform:
    return lambda query: query.where(predicate)


def get_query_transforms(
    criteria: Union[EventsFilter, Mapping[str, Any], None],
) -> list[QueryTransform]:
    """
    Build one transform per present filter field, in table order.

    Mappings are validated through ``EventsFilter``; unknown keys are ignored.
    """
    if criteria is None:
        return []
    if not isinstance(criteria, EventsFilter):
        criteria = EventsFilter.model_validate(dict(criteria))
    values = criteria.model_dump()

    transforms = []
    for field, build_predicate in FILTER_PREDICATES:
        value = values.get(field)
        if _is_present(value):
            transforms.append(_where(build_predicate(value)))
    return transforms


def pipe(*transforms: QueryTransform) -> QueryTransform:
    """Left-to-right composition; no transforms gives the identity."""
    return lambda query: reduce(lambda acc, step: step(acc), transforms, query)


def compose_filters(
    criteria: Union[EventsFilter, Mapping[str, Any], None],
) -> QueryTransform:
    """Fold every applicable filter into a single query transform."""
    return pipe(*get_query_transforms(criteria))
