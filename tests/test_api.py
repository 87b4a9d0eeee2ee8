"""
Tests for calculator and property API endpoints.
"""

import pytest

from app.api.calculations import get_fee_schedule
from app.calculations.policy import FeeSchedule
from app.main import app

# The client fixture is provided by conftest.py


@pytest.fixture
def rent_vs_buy_payload():
    return {
        "property_price": 1000000,
        "down_payment": 200000,
        "interest_rate_percent": 3.5,
        "loan_term_years": 25,
        "property_appreciation_rate_percent": 3.0,
        "annual_maintenance_cost": 5000,
        "annual_property_tax": 2000,
        "monthly_rent": 5000,
        "annual_rent_increase_rate_percent": 5.0,
        "security_deposit": 10000,
        "investment_return_rate_percent": 7.0,
        "analysis_period_years": 10,
    }


# ============================================================================
# CALCULATION API TESTS
# ============================================================================


class TestCalculationsAPI:
    """Test calculation endpoints."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_calculate_loan(self, client):
        response = client.post(
            "/api/calculate/loan",
            json={
                "property_price": 1000000,
                "down_payment": 200000,
                "interest_rate_percent": 3.5,
                "term_years": 25,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["loan_amount"] == 800000
        assert 4004 < data["monthly_payment"] < 4006
        assert data["loan_to_value_ratio"] == pytest.approx(80.0)

    def test_calculate_loan_invalid(self, client):
        response = client.post(
            "/api/calculate/loan",
            json={"property_price": 100000, "down_payment": 200000},
        )
        assert response.status_code == 400
        assert "down_payment" in response.json()["detail"]

    def test_rate_error_names_request_field(self, client):
        loan = client.post(
            "/api/calculate/loan",
            json={
                "property_price": 1000000,
                "down_payment": 200000,
                "interest_rate_percent": 150,
            },
        )
        costs = client.post(
            "/api/calculate/cost-breakdown",
            json={"property_price": 1000000, "interest_rate_percent": -1},
        )
        for response in (loan, costs):
            assert response.status_code == 400
            assert response.json()["detail"].startswith("interest_rate_percent:")

    def test_calculate_loan_missing_field(self, client):
        response = client.post("/api/calculate/loan", json={"down_payment": 1000})
        assert response.status_code == 422

    def test_cost_breakdown(self, client):
        response = client.post(
            "/api/calculate/cost-breakdown",
            json={"property_price": 1000000, "down_payment_percent": 20},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["registration_fee"] == pytest.approx(40000)
        assert data["title_deed_fee"] == 580
        assert data["total_upfront_costs"] == pytest.approx(293580)

    def test_cost_breakdown_uses_configured_schedule(self, client):
        app.dependency_overrides[get_fee_schedule] = lambda: FeeSchedule(
            title_deed_fee=999
        )
        try:
            response = client.post(
                "/api/calculate/cost-breakdown",
                json={"property_price": 1000000},
            )
        finally:
            app.dependency_overrides.pop(get_fee_schedule, None)
        assert response.status_code == 200
        assert response.json()["title_deed_fee"] == 999

    def test_service_charge(self, client):
        response = client.post(
            "/api/calculate/service-charge",
            json={"property_type": "apartment", "size_sq_ft": 1000, "age_years": 0},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["annual_estimate"] == pytest.approx(13.2)
        assert data["monthly_estimate"] == pytest.approx(1.1)

    def test_service_charge_amenity_names(self, client):
        response = client.post(
            "/api/calculate/service-charge",
            json={"size_sq_ft": 1000, "age_years": 5, "amenities": ["pool", "gym"]},
        )
        assert response.status_code == 200
        assert response.json()["amenity_surcharge"] == 800

    def test_service_charge_unknown_type(self, client):
        response = client.post(
            "/api/calculate/service-charge",
            json={"property_type": "castle", "size_sq_ft": 1000},
        )
        assert response.status_code == 400
        assert "property_type" in response.json()["detail"]

    def test_rent_vs_buy(self, client, rent_vs_buy_payload):
        response = client.post("/api/calculate/rent-vs-buy", json=rent_vs_buy_payload)
        assert response.status_code == 200
        data = response.json()
        assert len(data["yearly_projection"]) == 10
        assert data["is_buying_better"] == (
            data["net_worth_after_buying"] > data["net_worth_after_renting"]
        )
        assert data["inputs"]["monthly_rent"] == 5000

    def test_rent_vs_buy_never_breaks_even(self, client, rent_vs_buy_payload):
        rent_vs_buy_payload.update(
            property_appreciation_rate_percent=-10,
            monthly_rent=1000,
            annual_rent_increase_rate_percent=0,
            analysis_period_years=5,
        )
        response = client.post("/api/calculate/rent-vs-buy", json=rent_vs_buy_payload)
        assert response.status_code == 200
        assert response.json()["break_even_years"] is None

    def test_rent_vs_buy_invalid(self, client, rent_vs_buy_payload):
        rent_vs_buy_payload["analysis_period_years"] = 0
        response = client.post("/api/calculate/rent-vs-buy", json=rent_vs_buy_payload)
        assert response.status_code == 400

    def test_amortization(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={
                "principal": 100000,
                "interest_rate_percent": 6,
                "amortization_years": 5,
                "start_date": "2025-01-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data["schedule"]) == 60
        assert data["schedule"][0]["date"] == "2025-01-01"
        assert data["total_principal"] == pytest.approx(100000)

    def test_amortization_invalid_term(self, client):
        response = client.post(
            "/api/calculate/amortization",
            json={"principal": 100000, "interest_rate_percent": 6, "amortization_years": 0},
        )
        assert response.status_code == 400


# ============================================================================
# PROPERTY API TESTS
# ============================================================================


class TestPropertyAPI:
    """Test property endpoints."""

    def test_list_properties(self, client):
        response = client.get("/api/properties/")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == len(data["properties"])
        assert any(p["name"] == "Penthouse in Marina" for p in data["properties"])

    def test_list_properties_filtered(self, client):
        response = client.get("/api/properties/", params={"property_type": "villa"})
        assert response.status_code == 200
        assert [p["id"] for p in response.json()["properties"]] == ["2"]

    def test_get_property(self, client):
        response = client.get("/api/properties/3")
        assert response.status_code == 200
        assert response.json()["property_type"] == "townhouse"

    def test_get_nonexistent_property(self, client):
        response = client.get("/api/properties/nonexistent-id")
        assert response.status_code == 404

    def test_property_loan(self, client):
        response = client.post(
            "/api/properties/1/loan",
            json={"down_payment": 300000, "interest_rate_percent": 4, "term_years": 20},
        )
        assert response.status_code == 200
        assert response.json()["loan_amount"] == 1200000

    def test_property_loan_not_found(self, client):
        response = client.post("/api/properties/999/loan", json={"down_payment": 1})
        assert response.status_code == 404

    def test_property_cost_breakdown(self, client):
        response = client.post("/api/properties/2/cost-breakdown", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["registration_fee"] == pytest.approx(3500000 * 0.04)
        # 2.8M loan is above the processing fee cap
        assert data["mortgage_processing_fee"] == 10000

    def test_property_service_charge(self, client):
        response = client.post(
            "/api/properties/4/service-charge",
            json={"amenities": {"pool": True}, "as_of_year": 2025},
        )
        assert response.status_code == 200
        data = response.json()
        # Built 2010, so 15 years old in 2025
        assert data["age_factor"] == 0.9
        assert data["annual_estimate"] == pytest.approx(1500 * 12 / 1000 * 0.9 + 500)

    def test_property_service_charge_unsupported_type(self, client):
        response = client.post("/api/properties/5/service-charge", json={})
        assert response.status_code == 400

    def test_property_rent_vs_buy(self, client, rent_vs_buy_payload):
        rent_vs_buy_payload.pop("property_price")
        response = client.post("/api/properties/1/rent-vs-buy", json=rent_vs_buy_payload)
        assert response.status_code == 200
        assert response.json()["inputs"]["property_price"] == 1500000

    def test_compare_properties(self, client):
        response = client.post(
            "/api/properties/compare",
            json={"property1_id": "1", "property2_id": "2", "holding_period_years": 5},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["first"]["name"] == "Luxury Apartment in Downtown"
        assert data["second"]["price_per_sq_ft"] == pytest.approx(1000)

    def test_compare_shared_growth_favours_first(self, client):
        for first, second in (("1", "5"), ("5", "1")):
            response = client.post(
                "/api/properties/compare",
                json={"property1_id": first, "property2_id": second},
            )
            assert response.status_code == 200
            data = response.json()
            assert data["first"]["roi_percent"] == data["second"]["roi_percent"]
            assert data["better_roi"] == data["first"]["name"]

    def test_compare_missing_property(self, client):
        response = client.post(
            "/api/properties/compare",
            json={"property1_id": "1", "property2_id": "404"},
        )
        assert response.status_code == 404

    def test_property_document_checklist(self, client):
        response = client.post(
            "/api/properties/2/document-checklist",
            json={
                "buyer_type": "self_employed",
                "nationality": "UK",
                "residence_status": "non_resident",
                "selected_bank": "ADCB",
                "is_off_plan": True,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["property_id"] == "2"
        assert "ADCB specific forms" in data["bank_documents"]
        assert "Escrow account details" in data["additional_documents"]
        assert data["identity_documents"][0] == "Passport copy"
        assert "As a non-resident buyer" in data["notes"]

    def test_property_document_checklist_invalid_profile(self, client):
        response = client.post(
            "/api/properties/1/document-checklist",
            json={
                "buyer_type": "salaried",
                "nationality": "UK",
                "residence_status": "tourist",
            },
        )
        assert response.status_code == 400
        assert "residence_status" in response.json()["detail"]

    def test_property_document_checklist_not_found(self, client):
        response = client.post(
            "/api/properties/404/document-checklist",
            json={
                "buyer_type": "salaried",
                "nationality": "UK",
                "residence_status": "non_resident",
            },
        )
        assert response.status_code == 404
