from datetime import timedelta
from io import BytesIO

from fastapi import status
from openpyxl import Workbook

from arf.core.config import settings
from arf.utils.dates import add_months, format_calendar_date, local_today

API = settings.api_v1_str


def _create_server(client, name: str = "Alpha", cost: str = "10,00") -> dict:
    response = client.post(f"{API}/servers", json={"name": name, "cost_per_active": cost})
    assert response.status_code == status.HTTP_201_CREATED, response.json()
    return response.json()


def test_create_customer_records_founding_renewal(client) -> None:
    server = _create_server(client)
    response = client.post(
        f"{API}/customers",
        json={"name": "Ana", "phone": "11999990000", "server_id": server["id"], "plan_id": "1"},
    )
    assert response.status_code == status.HTTP_201_CREATED, response.json()
    customer = response.json()
    assert customer["amount_paid"] == 35
    assert customer["due_date"] == format_calendar_date(add_months(local_today(), 1))

    renewals = client.get(f"{API}/renewals", params={"customer_id": customer["id"]}).json()
    assert len(renewals) == 1
    assert renewals[0]["cost"] == 10


def test_create_customer_requires_name(client) -> None:
    response = client.post(f"{API}/customers", json={"name": "   "})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_create_customer_rejects_bad_amount(client) -> None:
    response = client.post(f"{API}/customers", json={"name": "Ana", "amount_paid": "trinta"})
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_list_customers_with_status_filter(client) -> None:
    today = local_today()
    client.post(f"{API}/customers", json={"name": "Ativa", "plan_id": "1"})
    client.post(
        f"{API}/customers",
        json={"name": "Vencida", "plan_id": "1", "due_date": format_calendar_date(today - timedelta(days=3))},
    )

    everyone = client.get(f"{API}/customers").json()
    assert [item["name"] for item in everyone] == ["Vencida", "Ativa"]
    assert everyone[0]["status"] == "Vencido"
    assert everyone[0]["due_label"] == "Vencido há 3 dias"
    assert everyone[0]["plan_name"] == "Mensal"

    expired = client.get(f"{API}/customers", params={"status": "vencido"}).json()
    assert [item["name"] for item in expired] == ["Vencida"]


def test_update_and_delete_customer(client) -> None:
    created = client.post(f"{API}/customers", json={"name": "Ana", "plan_id": "1"}).json()

    response = client.patch(f"{API}/customers/{created['id']}", json={"phone": "21988880000"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["phone"] == "21988880000"
    # editing does not record a payment
    assert len(client.get(f"{API}/renewals").json()) == 1

    assert client.delete(f"{API}/customers/{created['id']}").status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"{API}/customers/{created['id']}").status_code == status.HTTP_404_NOT_FOUND


def test_renew_customer_endpoint(client) -> None:
    created = client.post(f"{API}/customers", json={"name": "Ana", "plan_id": "1"}).json()

    response = client.post(
        f"{API}/customers/{created['id']}/renew",
        json={"server_id": "", "plan_id": "2", "amount_paid": "85,00"},
    )

    assert response.status_code == status.HTTP_200_OK, response.json()
    body = response.json()
    assert body["plan_id"] == "2"
    assert body["amount_paid"] == 85
    expected = add_months(add_months(local_today(), 1), 3)
    assert body["due_date"] == format_calendar_date(expected)

    missing = client.post(f"{API}/customers/nao-existe/renew", json={"server_id": "", "plan_id": "1"})
    assert missing.status_code == status.HTTP_404_NOT_FOUND


def test_notify_customer_endpoint(client) -> None:
    due = format_calendar_date(local_today() + timedelta(days=7))
    created = client.post(
        f"{API}/customers",
        json={"name": "Ana", "phone": "+55 11 99999-0000", "plan_id": "1", "due_date": due},
    ).json()
    assert client.get(f"{API}/dashboard/notifications").json()[0]["id"] == created["id"]

    response = client.post(f"{API}/customers/{created['id']}/notify")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["link"].startswith("https://wa.me/5511999990000?text=")
    assert "Ana" in body["message"]
    assert client.get(f"{API}/dashboard/notifications").json() == []


def test_import_customers_from_spreadsheet(client) -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Nome", "WhatsApp", "Plano", "Valor", "Vencimento"])
    sheet.append(["Ana", "11999990000", "Mensal", 35, "10/05/2030"])
    sheet.append(["", "11999990001", "Mensal", 35, "10/05/2030"])
    buffer = BytesIO()
    workbook.save(buffer)

    response = client.post(
        f"{API}/customers/import",
        files={"file": ("clientes.xlsx", buffer.getvalue(), "application/octet-stream")},
    )

    assert response.status_code == status.HTTP_200_OK, response.json()
    assert response.json() == {"imported": 1, "skipped": 1}
    [customer] = client.get(f"{API}/customers").json()
    assert customer["due_date"] == "2030-05-10"


def test_import_template_download(client) -> None:
    response = client.get(f"{API}/customers/import/template")
    assert response.status_code == status.HTTP_200_OK
    assert response.headers["content-type"].startswith("application/vnd.openxmlformats")
