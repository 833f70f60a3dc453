import json

import pytest
from sqlmodel import Session, select

from arf.core.config import settings
from arf.models.catalog import FREE_PLAN_ID, FREE_PLAN_NAME, Plan, Server
from arf.models.customer import Customer
from arf.models.ledger import Renewal
from arf.services.backup import BackupError, BackupService
from arf.services.notification import NotificationService


def _backup_payload(**overrides) -> dict:
    payload = {
        "customers": [
            {
                "id": "c1",
                "name": "Ana",
                "phone": "11999990000",
                "serverId": "s1",
                "planId": "1",
                "amountPaid": 35,
                "dueDate": "2024-03-10",
                "lastNotifiedDate": None,
            }
        ],
        "servers": [{"id": "s1", "name": "Alpha", "costPerActive": 10}],
        "plans": [{"id": "1", "name": "Mensal", "months": 1, "defaultPrice": 35}],
        "renewals": [
            {
                "id": "r1",
                "customerId": "c1",
                "serverId": "s1",
                "planId": "1",
                "amount": 35,
                "cost": 10,
                "date": "2024-02-10T12:00:00",
            }
        ],
        "manualAdditions": [],
        "version": "1.2",
        "exportDate": "2024-03-01T10:00:00",
    }
    payload.update(overrides)
    return payload


def test_restore_replaces_collections_and_recreates_free_plan(db_session: Session):
    db_session.add(Customer(name="Antigo", due_date="2024-01-01"))
    db_session.commit()

    summary = BackupService(db_session).restore(json.dumps(_backup_payload()).encode())

    assert summary.customers == 1
    assert summary.plans == 1
    assert summary.manual_additions == 0
    names = [c.name for c in db_session.exec(select(Customer)).all()]
    assert names == ["Ana"]
    plan_names = {p.name for p in db_session.exec(select(Plan)).all()}
    assert plan_names == {"Mensal", FREE_PLAN_NAME}
    assert db_session.get(Plan, FREE_PLAN_ID) is not None
    assert db_session.get(Renewal, "r1").amount == 35


def test_restore_keeps_collections_missing_from_file(db_session: Session):
    db_session.add(Server(id="s9", name="Fica", cost_per_active=1))
    db_session.commit()
    payload = _backup_payload()
    del payload["servers"]

    summary = BackupService(db_session).restore(json.dumps(payload))

    assert summary.servers is None
    assert db_session.get(Server, "s9") is not None


def test_malformed_backup_aborts_without_writing(db_session: Session):
    db_session.add(Customer(id="keep", name="Existente", due_date="2024-01-01"))
    db_session.commit()
    payload = _backup_payload(renewals=[{"id": "r1", "customerId": "c1", "amount": 35, "date": "ontem"}])

    with pytest.raises(BackupError):
        BackupService(db_session).restore(json.dumps(payload))

    assert [c.id for c in db_session.exec(select(Customer)).all()] == ["keep"]


@pytest.mark.parametrize("raw", [b"{nao e json", b"[1, 2]"])
def test_invalid_json_is_rejected(db_session: Session, raw):
    with pytest.raises(BackupError):
        BackupService(db_session).restore(raw)


def test_duplicate_ids_are_rejected(db_session: Session):
    servers = [{"id": "s1", "name": "A"}, {"id": "s1", "name": "B"}]
    with pytest.raises(BackupError):
        BackupService(db_session).restore(json.dumps(_backup_payload(servers=servers)))


def test_export_uses_camel_case_keys(db_session: Session):
    db_session.add(Server(id="s1", name="Alpha", cost_per_active=10))
    db_session.commit()

    exported = BackupService(db_session).export()

    assert exported["version"] == "1.2"
    assert "exportDate" in exported
    assert "manualAdditions" in exported
    assert exported["servers"] == [{"id": "s1", "name": "Alpha", "costPerActive": 10.0}]
    assert {plan["id"] for plan in exported["plans"]} == {"0", "1", "2", "3", "4"}


def test_clear_all_reseeds_default_plans(db_session: Session):
    db_session.add(Customer(name="Ana", due_date="2024-01-01"))
    db_session.commit()
    NotificationService(db_session).set_template("Oi {nome}")

    BackupService(db_session).clear_all()

    assert db_session.exec(select(Customer)).all() == []
    assert len(db_session.exec(select(Plan)).all()) == 5
    assert NotificationService(db_session).get_template() == settings.default_whatsapp_message
