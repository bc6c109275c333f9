"""Unit tests for event filter composition.

Queries are compiled against the PostgreSQL dialect and inspected; no
database is needed.
"""

from datetime import date

from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from services.events_service.filters import (
    FILTER_FIELDS,
    compose_filters,
    get_query_transforms,
    pipe,
)
from services.events_service.models import Event
from services.events_service.schemas import EventsFilter


def _compile(criteria):
    query = compose_filters(criteria)(select(Event))
    return query.compile(dialect=postgresql.dialect())


def _where_clause(compiled) -> str:
    sql = str(compiled)
    assert "WHERE" in sql, sql
    return sql.split("WHERE", 1)[1]


class TestComposeFilters:
    """Tests for compose_filters / get_query_transforms."""

    def test_empty_filter_is_identity(self):
        query = select(Event)

        assert compose_filters(EventsFilter())(query) is query
        assert compose_filters({})(query) is query
        assert compose_filters(None)(query) is query

    def test_empty_strings_impose_no_constraint(self):
        assert get_query_transforms({"location": "", "title": "   ", "q": ""}) == []

    def test_unknown_keys_are_ignored(self):
        assert get_query_transforms({"created_by": "someone", "time": "18:00"}) == []

    def test_single_equality_filter(self):
        compiled = _compile(EventsFilter(location="NY"))
        where = _where_clause(compiled)

        assert "events.location =" in where
        assert list(compiled.params.values()) == ["NY"]

    def test_fields_apply_in_fixed_order_regardless_of_input_order(self):
        criteria = {
            "q": "jazz",
            "rsvp_end_date": date(2026, 11, 1),
            "date": date(2026, 11, 20),
            "title": "Jazz Night",
            "location": "NY",
        }
        where = _where_clause(_compile(criteria))

        positions = [
            where.index("events.location ="),
            where.index("events.title ="),
            where.index("events.date ="),
            where.index("events.rsvp_end_date ="),
            where.index("@@"),
        ]
        assert positions == sorted(positions)
        assert len(get_query_transforms(criteria)) == 5

    def test_predicates_are_anded(self):
        where = _where_clause(_compile({"location": "NY", "title": "Jazz Night"}))

        assert " AND " in where

    def test_rsvp_end_date_uses_its_own_value(self):
        event_date = date(2026, 11, 20)
        rsvp_end = date(2026, 11, 1)
        compiled = _compile({"date": event_date, "rsvp_end_date": rsvp_end})

        assert set(compiled.params.values()) == {event_date, rsvp_end}

    def test_range_filters(self):
        criteria = EventsFilter(
            date_gte=date(2026, 1, 1),
            date_lt=date(2027, 1, 1),
            rsvp_end_date_gt=date(2026, 6, 1),
            rsvp_end_date_lte=date(2026, 12, 31),
        )
        where = _where_clause(_compile(criteria))

        assert "events.date >=" in where
        assert "events.date <" in where
        assert "events.rsvp_end_date >" in where
        assert "events.rsvp_end_date <=" in where

    def test_search_string_is_bound_not_interpolated(self):
        search = "'); DROP TABLE events; --"
        compiled = _compile(EventsFilter(q=search))
        where = _where_clause(compiled)

        assert "events.document @@ websearch_to_tsquery(" in where
        assert "DROP TABLE" not in str(compiled)
        assert search in compiled.params.values()

    def test_every_filter_field_is_declared_on_the_schema(self):
        assert set(FILTER_FIELDS) <= set(EventsFilter.model_fields)


class TestPipe:
    """Tests for left-to-right composition."""

    def test_no_transforms_is_identity(self):
        assert pipe()("query") == "query"

    def test_transforms_run_left_to_right(self):
        composed = pipe(lambda value: value + "a", lambda value: value + "b")

        assert composed("") == "ab"
