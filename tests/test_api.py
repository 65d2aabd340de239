"""HTTP tests for the v1 API."""

from uuid import uuid4

API = "/api/v1"


def _body(model, **input_data):
    return {
        "documentGroupId": model.document_group_id,
        "feeTypeId": model.id,
        "inputData": input_data,
    }


class TestFeeCalculationEndpoints:
    def test_create_calculation(self, client, stored_fee_type):
        model = stored_fee_type()
        response = client.post(f"{API}/fee-calculations", json=_body(model))

        assert response.status_code == 201
        data = response.json()
        assert data["totalFee"] == 500000
        assert data["calculationResult"]["baseFee"] == 500000
        assert data["feeTypeId"] == model.id
        assert data["userId"] is None
        assert response.headers["X-Request-ID"]

    def test_user_header_is_recorded(self, client, stored_fee_type):
        model = stored_fee_type()
        user_id = str(uuid4())
        response = client.post(
            f"{API}/fee-calculations",
            json=_body(model),
            headers={"X-User-ID": user_id},
        )
        assert response.json()["userId"] == user_id

        listed = client.get(f"{API}/fee-calculations", params={"userId": user_id}).json()
        assert listed["total"] == 1

    def test_quote_is_not_recorded(self, client, stored_fee_type):
        model = stored_fee_type(
            calculation_method="TIERED",
            base_fee=None,
            formula={
                "method": "TIERED",
                "tiers": [
                    {"from": 0, "to": 100, "rate": 0.01},
                    {"from": 100, "to": 500, "rate": 0.02},
                    {"from": 500, "to": None, "rate": 0.03},
                ],
            },
        )
        response = client.post(f"{API}/fee-calculations/quote", json=_body(model, property_value=300))

        assert response.status_code == 200
        data = response.json()
        assert data["totalFee"] == 5
        assert [item["amount"] for item in data["tieredFees"]] == [1, 4]
        assert client.get(f"{API}/fee-calculations").json()["total"] == 0

    def test_get_calculation(self, client, stored_fee_type):
        model = stored_fee_type()
        created = client.post(f"{API}/fee-calculations", json=_body(model)).json()

        response = client.get(f"{API}/fee-calculations/{created['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_unknown_calculation(self, client):
        response = client.get(f"{API}/fee-calculations/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "CALCULATION_NOT_FOUND"

    def test_list_pagination(self, client, stored_fee_type):
        model = stored_fee_type()
        for _ in range(3):
            client.post(f"{API}/fee-calculations", json=_body(model))

        data = client.get(
            f"{API}/fee-calculations",
            params={"feeTypeId": model.id, "page": 2, "limit": 2},
        ).json()
        assert data["total"] == 3
        assert data["page"] == 2
        assert data["totalPages"] == 2
        assert len(data["items"]) == 1

    def test_inactive_fee_type(self, client, stored_fee_type):
        model = stored_fee_type(status=False)
        response = client.post(f"{API}/fee-calculations", json=_body(model))
        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "FEE_TYPE_INACTIVE"

    def test_missing_variable(self, client, stored_fee_type):
        model = stored_fee_type(
            calculation_method="PERCENT",
            base_fee=None,
            percentage=0.015,
        )
        response = client.post(f"{API}/fee-calculations", json=_body(model))
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["code"] == "MISSING_VARIABLE"
        assert detail["details"]["variable"] == "property_value"

    def test_non_scalar_input_rejected(self, client, stored_fee_type):
        model = stored_fee_type()
        body = _body(model)
        body["inputData"] = {"num_copies": [1, 2]}
        assert client.post(f"{API}/fee-calculations", json=body).status_code == 422

    def test_out_of_range_input(self, client, stored_fee_type):
        model = stored_fee_type(calculation_method="PERCENT", base_fee=None, percentage=0.015)
        response = client.post(
            f"{API}/fee-calculations/quote",
            json=_body(model, property_value="1e3000000"),
        )
        assert response.status_code == 422
        assert response.json()["detail"]["details"] == {
            "variable": "property_value",
            "reason": "out of range",
        }

    def test_list_sorted_by_total_fee(self, client, stored_fee_type):
        for base_fee in (300, 20000, 1000):
            client.post(f"{API}/fee-calculations", json=_body(stored_fee_type(base_fee=base_fee)))

        data = client.get(
            f"{API}/fee-calculations",
            params={"sortBy": "totalFee", "sortOrder": "ASC"},
        ).json()
        assert [item["totalFee"] for item in data["items"]] == [300, 1000, 20000]

    def test_unknown_sort_field_rejected(self, client):
        response = client.get(f"{API}/fee-calculations", params={"sortBy": "userId"})
        assert response.status_code == 422


class TestFeeTypeEndpoints:
    def _payload(self, **overrides):
        payload = {
            "documentGroupId": str(uuid4()),
            "name": "Land transfer contract",
            "calculationMethod": "FORMULA",
            "formula": {"method": "FORMULA", "customFormula": "base * qty + 20000"},
        }
        payload.update(overrides)
        return payload

    def test_validate(self, client):
        response = client.post(f"{API}/fee-types/validate", json=self._payload())
        assert response.status_code == 200
        assert response.json()["requiredFields"] == ["base", "qty"]

    def test_validate_rejects_conditional_formula(self, client):
        payload = self._payload(
            formula={"method": "FORMULA", "customFormula": "base * qty + (qty > 10 ? 0 : 0)"}
        )
        response = client.post(f"{API}/fee-types/validate", json=payload)
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["code"] == "FORMULA_SYNTAX_ERROR"
        assert detail["details"] == {"token": ">", "position": 18}

    def test_create_then_calculate(self, client):
        created = client.post(f"{API}/fee-types", json=self._payload())
        assert created.status_code == 201
        fee_type = created.json()

        response = client.post(
            f"{API}/fee-calculations/quote",
            json={
                "documentGroupId": fee_type["documentGroupId"],
                "feeTypeId": fee_type["id"],
                "inputData": {"base": 50000, "qty": 3},
            },
        )
        assert response.json()["formulaFee"] == 170000

        listed = client.get(f"{API}/fee-types/by-document-group/{fee_type['documentGroupId']}")
        assert [item["id"] for item in listed.json()] == [fee_type["id"]]

    def test_get_unknown_fee_type(self, client):
        response = client.get(f"{API}/fee-types/{uuid4()}")
        assert response.status_code == 404

    def test_create_keeps_percentage_digits(self, client):
        payload = self._payload(
            calculationMethod="PERCENT",
            formula=None,
            percentage="0.00015",
        )
        created = client.post(f"{API}/fee-types", json=payload).json()
        assert created["percentage"] == "0.00015"

        fetched = client.get(f"{API}/fee-types/{created['id']}").json()
        assert fetched["percentage"] == "0.00015"

        response = client.post(
            f"{API}/fee-calculations/quote",
            json={
                "documentGroupId": created["documentGroupId"],
                "feeTypeId": created["id"],
                "inputData": {"property_value": 1_000_000_000},
            },
        )
        assert response.json()["totalFee"] == 150000

    def test_update_status(self, client):
        fee_type = client.post(f"{API}/fee-types", json=self._payload()).json()
        quote = {
            "documentGroupId": fee_type["documentGroupId"],
            "feeTypeId": fee_type["id"],
            "inputData": {"base": 50000, "qty": 3},
        }

        response = client.patch(f"{API}/fee-types/{fee_type['id']}/status", json={"status": False})
        assert response.status_code == 200
        assert response.json()["status"] is False
        assert client.post(f"{API}/fee-calculations/quote", json=quote).status_code == 409

        client.patch(f"{API}/fee-types/{fee_type['id']}/status", json={"status": True})
        assert client.post(f"{API}/fee-calculations/quote", json=quote).status_code == 200

    def test_update_status_of_unknown_fee_type(self, client):
        response = client.patch(f"{API}/fee-types/{uuid4()}/status", json={"status": False})
        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "FEE_TYPE_NOT_FOUND"


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
