from __future__ import annotations

import random
from datetime import datetime, timedelta
from itertools import islice

import pytest

from payroll_engine.core.constants import DEFAULT_POLICY_VALUES
from payroll_engine.core.exceptions import NoActivePolicyError, NotFoundError, ValidationError
from payroll_engine.policy.memory_policy_repository import InMemoryPayPolicyRepository
from payroll_engine.policy.model import POLICY_FIELDS, WIRE_NAMES
from payroll_engine.policy.service import PayPolicyStore


class TickingClock:
    def __init__(self):
        self._now = datetime(2024, 1, 1, 9, 0, 0)

    def __call__(self) -> datetime:
        self._now += timedelta(seconds=1)
        return self._now


def make_store() -> PayPolicyStore:
    return PayPolicyStore(InMemoryPayPolicyRepository(), clock=TickingClock())


def values(**overrides):
    data = dict(DEFAULT_POLICY_VALUES)
    data.update(overrides)
    return data


def active_ids(store: PayPolicyStore) -> list[int]:
    return [v.setting_id for v in store.list_history() if v.is_active]


def test_no_active_policy_before_first_version():
    store = make_store()
    with pytest.raises(NoActivePolicyError):
        store.get_active()


def test_create_version_activates_and_deactivates_previous():
    store = make_store()
    v1 = store.create_version(values())
    v2 = store.create_version(values(overtime_rate_staff=45000))

    assert store.get_active().setting_id == v2.setting_id
    assert store.get(v1.setting_id).is_active is False
    assert store.get(v1.setting_id).overtime_rate_staff == 40000


def test_exactly_one_active_across_random_operations():
    rng = random.Random(20240101)
    store = make_store()
    created: list[int] = []

    for _ in range(200):
        if not created or rng.random() < 0.3:
            created.append(store.create_version(values(premium_staff=rng.randint(0, 50000))).setting_id)
        else:
            store.activate(rng.choice(created))
        assert len(active_ids(store)) == 1


def test_activate_is_idempotent():
    store = make_store()
    v1 = store.create_version(values())
    store.create_version(values())

    store.activate(v1.setting_id)
    store.activate(v1.setting_id)

    assert active_ids(store) == [v1.setting_id]


def test_activate_unknown_version_raises_not_found_and_keeps_active():
    store = make_store()
    v1 = store.create_version(values())

    with pytest.raises(NotFoundError):
        store.activate(999)

    assert store.get_active().setting_id == v1.setting_id


def test_validation_reports_every_bad_field():
    store = make_store()
    bad = values(premium_production=-1, meal_staff_weekday="abc")
    del bad["overtime_rate_staff"]

    with pytest.raises(ValidationError) as exc_info:
        store.create_version(bad)

    fields = {e.field for e in exc_info.value.errors}
    assert fields == {"premium_production", "meal_staff_weekday", "overtime_rate_staff"}
    assert list(store.list_history()) == []


def test_zero_value_is_accepted_with_warning():
    store = make_store()
    warnings = store.validate_fields(values(premium_staff=0))

    assert [w.field for w in warnings] == ["premium_staff"]
    assert store.create_version(values(premium_staff=0)).premium_staff == 0


def test_dashboard_field_names_are_accepted():
    store = make_store()
    payload = {WIRE_NAMES[name]: DEFAULT_POLICY_VALUES[name] for name in POLICY_FIELDS}

    version = store.create_version(payload)

    assert version.to_dict()["tarif_lembur_produksi_per_jam"] == 30000


def test_history_is_newest_first_and_restartable():
    store = make_store()
    ids = [store.create_version(values()).setting_id for _ in range(4)]
    history = store.list_history()

    assert [v.setting_id for v in history] == list(reversed(ids))
    assert [v.setting_id for v in islice(history, 2)] == [ids[3], ids[2]]
    assert len(list(history)) == 4


def test_bootstrap_default_only_on_empty_store():
    store = make_store()
    first = store.bootstrap_default()
    assert first.rates() == DEFAULT_POLICY_VALUES

    custom = store.create_version(values(premium_production=22000))
    again = store.bootstrap_default()

    assert again.setting_id == custom.setting_id
    assert len(list(store.list_history())) == 2


def test_diff_lists_changed_fields():
    store = make_store()
    v1 = store.create_version(values())
    v2 = store.create_version(values(overtime_rate_production=32000))

    assert store.diff(v1.setting_id, v2.setting_id) == [
        {"field": "tarif_lembur_produksi_per_jam", "before": 30000, "after": 32000}
    ]
