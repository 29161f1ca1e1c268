from fastapi.testclient import TestClient

from solar_quote.main import app

client = TestClient(app)

ON_GRID = {
    "projectType": "on_grid",
    "panelWatts": 530,
    "panelCount": 10,
    "dcrPanelCount": 10,
    "projectValue": "₹ 3,00,000",
    "gstPercentage": 18,
    "earth": ["ac_dc"],
}


def test_health():
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_preview_bom():
    response = client.post("/api/v1/quotations/preview-bom", json={"project": ON_GRID})
    assert response.status_code == 200
    data = response.json()
    assert data["alerts"] == []
    rows = data["billOfMaterials"]
    assert rows[0]["slNo"] == 1
    assert rows[0]["description"] == "Solar Panel (DCR)"
    assert rows[-1]["qty"] == "-"
    earthing = next(row for row in rows if row["description"] == "Earthing")
    assert earthing["qty"] == 2


def test_preview_bom_split_panels_and_alert():
    split = dict(ON_GRID, dcrPanelCount=6, nonDcrPanelCount=4)
    rows = client.post("/api/v1/quotations/preview-bom", json={"project": split}).json()["billOfMaterials"]
    assert [row["slNo"] for row in rows[:3]] == ["1a", "1b", 2]

    no_panels = dict(ON_GRID, dcrPanelCount=0)
    data = client.post("/api/v1/quotations/preview-bom", json={"project": no_panels}).json()
    assert data["alerts"][0]["code"] == "BOM-NO-PANELS"


def test_quotation_template():
    payload = {
        "project": ON_GRID,
        "customer": {"name": "R. Kumar", "address": "Madurai", "mobile": "9876543210", "propertyType": "residential"},
        "quotation": {"quotationNumber": "Q-03-1052", "validUntil": "2026-03-25"},
        "quotationDate": "2026-03-10",
    }
    response = client.post("/api/v1/quotations/template", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["quotationNumber"] == "Q-03-1052"
    assert data["quotationDate"] == "10/03/2026"
    assert data["quoteValidity"] == "15 Days"
    pricing = data["pricingBreakdown"]
    assert pricing["customerPayment"] == 222000
    assert pricing["subsidyAmount"] == 78000
    assert pricing["valueWithGST"] == 300000
    assert data["bomSummary"]["inverterKW"] == 5.3
    assert data["billOfMaterials"][0]["slNo"] == 1


def test_unknown_project_type_is_bad_request():
    response = client.post("/api/v1/quotations/preview-bom", json={"project": {"projectType": "wind_turbine"}})
    assert response.status_code == 400
    assert "wind_turbine" in response.json()["detail"]


def test_bad_field_value_is_unprocessable():
    bad = dict(ON_GRID, inverterPhase="two_phase")
    response = client.post("/api/v1/quotations/preview-bom", json={"project": bad})
    assert response.status_code == 422


def test_bom_csv():
    response = client.post("/api/v1/quotations/bom.csv", json={"project": ON_GRID})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.text.splitlines()[0] == "Sl.No,Description,Type,Volt,Rating,Make,Qty,Unit"


def test_preview_bom_ignores_extra_request_fields():
    response = client.post(
        "/api/v1/quotations/preview-bom", json={"project": ON_GRID, "propertyType": "residential"},
    )
    assert response.status_code == 200
    assert response.json()["billOfMaterials"][0]["slNo"] == 1
