"""Entity schema validation: extra keys forbidden, partial updates, day entries.

Invariants:
    - EntityUpdate.changes() contains only the keys the client sent
    - Extra keys raise ValidationError (never silently dropped)
    - rating/rating_count are not part of EntityUpdate
"""

import pytest
from pydantic import ValidationError

from trustmap.core.domain_types import EntityStatus, Weekday
from trustmap.schemas.entity import DayHoursSchema, EntityCreate, EntityUpdate


def test_create_defaults_status_to_unverified():
    body = EntityCreate(type="cafe", area="center", title="Cafe", short_description="")
    assert body.status == EntityStatus.UNVERIFIED
    assert body.tags == []


def test_create_rejects_extra_keys():
    with pytest.raises(ValidationError):
        EntityCreate(
            type="cafe", area="center", title="Cafe", short_description="", id="mine",
        )


def test_create_rejects_rating_out_of_range():
    with pytest.raises(ValidationError):
        EntityCreate(type="cafe", area="c", title="Cafe", short_description="", rating=6)


def test_update_changes_only_contains_sent_keys():
    body = EntityUpdate.model_validate({"title": "New"})
    assert body.changes() == {"title": "New"}


def test_update_explicit_null_work_hours_is_kept():
    body = EntityUpdate.model_validate({"work_hours": None})
    assert body.changes() == {"work_hours": None}


@pytest.mark.parametrize("key", ["rating", "rating_count", "id", "updated_at", "colour"])
def test_update_rejects_non_client_fields(key):
    with pytest.raises(ValidationError):
        EntityUpdate.model_validate({key: 1})


def test_work_hours_keys_parsed_as_weekdays():
    body = EntityUpdate.model_validate(
        {"work_hours": {"monday": {"open": "09:00", "close": "17:00"}}},
    )
    assert Weekday.MONDAY in body.work_hours


def test_day_hours_requires_both_times_when_open():
    with pytest.raises(ValidationError):
        DayHoursSchema(open="09:00")


def test_day_hours_rejects_malformed_time():
    with pytest.raises(ValidationError):
        DayHoursSchema(open="9am", close="17:00")


def test_day_hours_closed_needs_no_times():
    assert DayHoursSchema(closed=True).open is None


def test_unknown_weekday_rejected():
    with pytest.raises(ValidationError):
        EntityUpdate.model_validate({"work_hours": {"caturday": {"closed": True}}})
