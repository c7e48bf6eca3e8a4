"""Tests for the distributor gateway endpoint."""

from unittest.mock import patch

import pytest

GENERIC = "An unexpected error occurred."


def _envelope(action: str, payload=None) -> dict:
    body = {"vendor": "canadaTire", "action": action}
    if payload is not None:
        body["payload"] = payload
    return body


class TestScenarios:
    """End-to-end flows against the fake RESTlet."""

    def test_search_products_success(self, client, wired_adapter, fake_restlet):
        fake_restlet.body = {"success": True, "data": [{"partNumber": "X1", "brand": "PIRELLI"}]}

        response = client.post("/", json=_envelope(
            "searchProducts", {"filters": {"brand": "PIRELLI", "isTire": True}}
        ))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": [{"partNumber": "X1", "brand": "PIRELLI"}],
        }
        assert fake_restlet.last.body["filters"] == {"brand": "PIRELLI", "isTire": True}

    def test_submit_order_vendor_rejection(self, client, wired_adapter, fake_restlet):
        """Vendor success=false with code 400 surfaces its message."""
        fake_restlet.body = {
            "success": False,
            "error": {"code": 400, "errorMsg": "Item BAD is not available"},
        }

        response = client.post("/", json=_envelope("submitOrder", {"orderDetails": {
            "location": "TORONTO",
            "shipping": {"addrId": 1},
            "items": [{"partNumber": "BAD", "quantity": 1}],
        }}))

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": {"code": 400, "message": "Item BAD is not available"},
        }

    def test_html_reply_is_401(self, client, wired_adapter, fake_restlet):
        fake_restlet.body = "<!DOCTYPE html><html>Login required</html>"

        response = client.post("/", json=_envelope("getShipToAddresses"))

        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == 401
        assert "HTML instead of JSON" in body["error"]["message"]

    def test_update_order_address(self, client, wired_adapter, fake_restlet):
        fake_restlet.body = {"success": True, "data": {"soId": 991}}

        response = client.post("/", json=_envelope("updateOrderAddress", {
            "orderDetails": {"soId": 991, "shipping": {"addrId": 3, "city": "Toronto"}},
        }))

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": {"soId": 991}}
        assert fake_restlet.last.body["orderDetails"] == {
            "soId": 991,
            "shipping": {"addrId": 3, "city": "Toronto"},
        }

    def test_vendor_500_hidden(self, client, wired_adapter, fake_restlet):
        fake_restlet.body = {"success": False, "error": {"code": 500, "errorMsg": "SSS_NPE"}}

        response = client.post("/", json=_envelope("getShipToAddresses"))

        assert response.status_code == 500
        assert response.json()["error"] == {"code": 500, "message": GENERIC}

    def test_non_finite_vendor_number_is_enveloped_502(self, client, wired_adapter, fake_restlet):
        """A NaN in the vendor reply yields a JSON envelope, not a plain-text 500."""
        fake_restlet.body = '{"success": true, "data": [{"price": NaN}]}'

        response = client.post(
            "/", json=_envelope("getShipToAddresses"), headers={"Origin": "https://shop.example"}
        )

        assert response.status_code == 502
        assert response.json() == {
            "success": False,
            "error": {"code": 502, "message": "Canada Tire API returned malformed JSON"},
        }
        assert response.headers["access-control-allow-origin"] == "https://shop.example"


class TestEnvelopeValidation:
    """Tests for rejecting malformed envelopes."""

    def test_invalid_json(self, client, wired_adapter):
        response = client.post("/", content=b"{not json", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": {"code": 400, "message": "Request body must be valid JSON"},
        }

    def test_non_finite_number_in_request_body(self, client, wired_adapter, fake_restlet):
        response = client.post(
            "/",
            content=b'{"vendor": "canadaTire", "action": "searchProducts",'
            b' "payload": {"filters": {"width": NaN}}}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Request body must be valid JSON"
        assert fake_restlet.requests == []

    def test_empty_body(self, client, wired_adapter):
        response = client.post("/", content=b"")
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Request body must be valid JSON"

    @pytest.mark.parametrize("body", [b"[1, 2]", b'"text"', b"42", b"null"])
    def test_body_not_object(self, client, wired_adapter, body):
        response = client.post("/", content=body, headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Request body must be an object"

    def test_unsupported_vendor(self, client, wired_adapter, fake_restlet):
        response = client.post("/", json={"vendor": "acme", "action": "searchProducts"})
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Unsupported vendor"
        assert fake_restlet.requests == []

    def test_unsupported_action(self, client, wired_adapter, fake_restlet):
        response = client.post("/", json=_envelope("deleteEverything"))
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Unsupported action"
        assert fake_restlet.requests == []

    def test_payload_not_object(self, client, wired_adapter):
        response = client.post("/", json=_envelope("searchProducts", ["brand"]))
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "payload must be an object"

    def test_validation_error_names_field(self, client, wired_adapter, fake_restlet):
        response = client.post("/", json=_envelope(
            "searchProducts", {"filters": {"isWinter": "yes"}}
        ))
        assert response.status_code == 400
        assert "filters.isWinter" in response.json()["error"]["message"]
        assert fake_restlet.requests == []

    def test_missing_payload_for_search_is_allowed(self, client, wired_adapter, fake_restlet):
        response = client.post("/", json=_envelope("searchProducts"))
        assert response.status_code == 200
        assert "filters" not in fake_restlet.last.body

    def test_update_without_order_details(self, client, wired_adapter):
        response = client.post("/", json=_envelope("updateOrderAddress", {}))
        assert response.status_code == 400
        assert "orderDetails" in response.json()["error"]["message"]


class TestMethodsAndCors:
    """Tests for OPTIONS, 405 and CORS headers."""

    def test_options_preflight(self, client):
        response = client.options("/", headers={"Origin": "https://shop.example.com"})

        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["Access-Control-Allow-Origin"] == "https://shop.example.com"
        assert response.headers["Access-Control-Allow-Methods"] == "GET,POST,PUT,DELETE,OPTIONS"
        assert "Apikey" in response.headers["Access-Control-Allow-Headers"]
        assert response.headers["Vary"] == "Origin"

    def test_wildcard_origin_without_header(self, client):
        response = client.options("/")
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    def test_method_not_allowed(self, client, method):
        response = client.request(method, "/")

        assert response.status_code == 405
        assert response.json() == {
            "success": False,
            "error": {"code": 405, "message": "Method Not Allowed"},
        }
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_cors_on_error_response(self, client, wired_adapter):
        response = client.post("/", content=b"nope", headers={"Origin": "https://a.example"})
        assert response.headers["Access-Control-Allow-Origin"] == "https://a.example"

    def test_unknown_path_is_enveloped_404(self, client):
        response = client.post("/nowhere", json={})
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {"code": 404, "message": "Not Found"},
        }

    def test_cors_on_404_echoes_origin(self, client):
        response = client.get("/nowhere", headers={"Origin": "https://shop.example.com"})
        assert response.status_code == 404
        assert response.headers["Access-Control-Allow-Origin"] == "https://shop.example.com"
        assert response.headers["Vary"] == "Origin"

    def test_cors_on_success_without_origin(self, client, wired_adapter, fake_restlet):
        """Non-browser callers still get the header set, with a wildcard origin."""
        response = client.post("/", json=_envelope("getShipToAddresses"))
        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert "Vary" not in response.headers


class TestInternalFailures:
    """Tests for hidden failures rendering as a generic 500."""

    def test_missing_configuration(self, client, clear_canada_tire_env, caplog):
        response = client.post("/", json=_envelope("getShipToAddresses"))

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": {"code": 500, "message": GENERIC}}
        assert "CANADA_TIRE_BASE_URL" not in response.text
        assert "CANADA_TIRE_BASE_URL" in caplog.text

    def test_unexpected_exception(self, client, wired_adapter):
        with patch.object(
            type(wired_adapter),
            "get_ship_to_addresses",
            side_effect=RuntimeError("kaboom"),
        ):
            response = client.post("/", json=_envelope("getShipToAddresses"))

        assert response.status_code == 500
        assert response.json()["error"]["message"] == GENERIC
        assert "kaboom" not in response.text

    def test_transport_failure_hidden(self, client, wired_adapter, fake_restlet):
        import httpx

        fake_restlet.error = httpx.ConnectError("dns failure for internal-host")

        response = client.post("/", json=_envelope("getShipToAddresses"))

        assert response.status_code == 502
        assert response.json()["error"]["message"] == GENERIC


class TestHealth:
    """Tests for GET /health."""

    def test_health_configured(self, client, canada_tire_env):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["adapter_configured"] is True
        assert "version" in body

    def test_health_unconfigured(self, client, clear_canada_tire_env):
        body = client.get("/health").json()
        assert body["status"] == "degraded"
        assert body["adapter_configured"] is False
