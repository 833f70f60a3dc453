from datetime import date
from urllib.parse import unquote

from sqlmodel import Session

from arf.models.customer import Customer
from arf.services.notification import NotificationService, render_message, whatsapp_link


def test_render_message_replaces_tokens():
    customer = Customer(name="Ana", amount_paid=35.0, due_date="2024-03-10")
    message = render_message("Olá {nome}, vence em {dias}, valor {valor}", customer, 0)
    assert message == "Olá Ana, vence em hoje, valor R$ 35,00"


def test_render_message_days_and_due_date():
    customer = Customer(name="Bruno", amount_paid=90.0, due_date="2024-03-17")
    message = render_message("{nome}: {dias} ({vencimento})", customer, 7)
    assert message == "Bruno: 7 dias (17/03/2024)"


def test_render_message_replaces_first_occurrence_only():
    customer = Customer(name="Ana", amount_paid=35.0, due_date="2024-03-10")
    message = render_message("{nome} e {nome}", customer, 1)
    assert message == "Ana e {nome}"


def test_render_message_invalid_due_date_placeholder():
    customer = Customer(name="Ana", amount_paid=35.0, due_date="")
    assert render_message("{vencimento}", customer, 0) == "Data Inválida"


def test_whatsapp_link_encodes_message_and_strips_phone():
    link = whatsapp_link("+55 (11) 99999-0000", "Olá Ana & cia")
    assert link.startswith("https://wa.me/5511999990000?text=")
    assert "&" not in link.split("?text=", 1)[1]
    assert unquote(link.split("?text=", 1)[1]) == "Olá Ana & cia"


def test_notify_stamps_last_notified_date(db_session: Session):
    customer = Customer(name="Ana", phone="11 99999-0000", amount_paid=35.0, due_date="2024-03-17")
    db_session.add(customer)
    db_session.commit()

    service = NotificationService(db_session)
    service.set_template("Oi {nome}, faltam {dias}")
    result = service.notify(customer.id, today=date(2024, 3, 10))

    assert result is not None
    assert result.message == "Oi Ana, faltam 7 dias"
    assert result.phone == "11999990000"
    assert result.last_notified_date == "2024-03-10"
    db_session.refresh(customer)
    assert customer.last_notified_date == "2024-03-10"


def test_notify_unknown_customer_returns_none(db_session: Session):
    assert NotificationService(db_session).notify("nao-existe") is None


def test_template_falls_back_to_default(db_session: Session):
    template = NotificationService(db_session).get_template()
    assert "{nome}" in template
    assert "{valor}" in template
