"""Unit tests for the pricing API endpoints."""

import time

import pytest
from fastapi.testclient import TestClient

from launchpad import __version__
from launchpad.api.endpoints import get_engine
from launchpad.api.main import app
from launchpad.constants import CURVE_SUPPLY, U64_MAX
from launchpad.errors import MathOverflow
from launchpad.pricing.engine import PricingEngine
from tests.helpers import ONE_SOL, SOL_PRICE

STATE = {"tokens_sold": "0", "reserve": "0", "reference_price": str(SOL_PRICE)}


@pytest.fixture
def client():
    """Create a test client for the API."""
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestQuoteEndpoints:
    """Tests for buy and sell quotes."""

    def test_buy_quote(self, client):
        response = client.post("/quote/buy", json={"state": STATE, "amount": "1000000"})

        assert response.status_code == 200
        data = response.json()
        assert data["side"] == "buy"
        assert data["amount"] == "1000000"
        assert data["tokens_sold"] == "0"
        assert data["spot_price"] == "28"
        assert int(data["cost_or_proceeds"]) > 0
        assert data["platform_fee"] == "0"
        assert data["total"] == data["cost_or_proceeds"]

    def test_buy_quote_with_fee(self, client):
        response = client.post(
            "/quote/buy",
            json={"state": STATE, "amount": "1000000", "platform_fee_bps": 100},
        )

        data = response.json()
        cost = int(data["cost_or_proceeds"])
        assert int(data["platform_fee"]) == cost * 100 // 10_000
        assert int(data["total"]) == cost + int(data["platform_fee"])

    def test_sell_mirrors_buy(self, client):
        buy = client.post("/quote/buy", json={"state": STATE, "amount": "1000000"}).json()
        sell_state = {**STATE, "tokens_sold": "1000000", "reserve": buy["cost_or_proceeds"]}
        sell = client.post("/quote/sell", json={"state": sell_state, "amount": "1000000"}).json()

        assert sell["side"] == "sell"
        assert sell["cost_or_proceeds"] == buy["cost_or_proceeds"]
        assert sell["tokens_sold"] == "1000000"

    def test_explicit_rate_overrides_state(self, client):
        at_state = client.post("/quote/buy", json={"state": STATE, "amount": "1000000"}).json()
        at_half = client.post(
            "/quote/buy",
            json={"state": STATE, "amount": "1000000", "exchange_rate": str(SOL_PRICE // 2)},
        ).json()
        assert int(at_half["cost_or_proceeds"]) > int(at_state["cost_or_proceeds"])

    def test_fresh_oracle_price(self, client):
        oracle = {"price": 15_000_000_000, "exponent": -8, "publish_time": int(time.time())}
        response = client.post(
            "/quote/buy",
            json={"state": {"reference_price": "0"}, "amount": "1000", "oracle": oracle},
        )
        assert response.status_code == 200

    def test_stale_oracle_falls_back(self, client):
        oracle = {"price": 1, "exponent": 0, "publish_time": 0}
        response = client.post("/quote/buy", json={"state": STATE, "amount": "1000000", "oracle": oracle})
        assert response.status_code == 200
        assert response.json()["spot_price"] == "28"


class TestPricingErrors:
    """Tests for typed 400 responses."""

    @pytest.mark.parametrize(
        ("payload", "code"),
        [
            ({"state": STATE, "amount": "0"}, "invalid_amount"),
            ({"state": STATE, "amount": str(CURVE_SUPPLY + 1)}, "insufficient_supply"),
            ({"state": {**STATE, "is_graduated": True}, "amount": "1"}, "curve_graduated"),
            ({"amount": "1"}, "invalid_price"),
            ({"state": STATE, "amount": "1", "platform_fee_bps": 2_000}, "invalid_fee"),
            (
                {"curve": {"start_price": "700", "end_price": "690"}, "state": STATE, "amount": "1"},
                "invalid_curve_parameters",
            ),
        ],
    )
    def test_buy_errors(self, client, payload, code):
        response = client.post("/quote/buy", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == code
        assert response.json()["detail"]

    def test_sell_more_than_sold(self, client):
        response = client.post("/quote/sell", json={"state": STATE, "amount": "1"})
        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_supply"

    def test_engine_overflow_returns_400(self, client):
        """Arithmetic failures inside the engine map to math_overflow."""

        class OverflowingEngine(PricingEngine):
            def quote_buy(self, state, config, amount, exchange_rate):
                raise MathOverflow("Boom")

        app.dependency_overrides[get_engine] = lambda: OverflowingEngine()

        response = client.post("/quote/buy", json={"state": STATE, "amount": "1"})
        assert response.status_code == 400
        assert response.json() == {"error": "math_overflow", "detail": "Boom"}


class TestInvalidSchema:
    """Tests for request schema validation."""

    def test_negative_amount(self, client):
        response = client.post("/quote/buy", json={"state": STATE, "amount": "-1"})
        assert response.status_code == 422

    def test_missing_amount(self, client):
        response = client.post("/quote/buy", json={"state": STATE})
        assert response.status_code == 422

    def test_malformed_json(self, client):
        response = client.post(
            "/quote/buy",
            content="not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422


class TestSpotPriceEndpoint:
    """Tests for the spot price endpoint."""

    def test_spot_price(self, client):
        response = client.post("/spot-price", json={"state": STATE})
        assert response.status_code == 200
        assert response.json() == {"spot_price": "28", "tokens_sold": "0", "reserve": "0"}

    def test_spot_price_without_rate(self, client):
        response = client.post("/spot-price", json={})
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_price"

    def test_spot_price_above_u64(self, client):
        """Prices beyond u64 are a typed overflow, not a server error."""
        payload = {
            "curve": {"start_price": "1000000000000000", "end_price": "2000000000000000"},
            "exchange_rate": "1",
        }
        response = client.post("/spot-price", json=payload)
        assert response.status_code == 400
        assert response.json()["error"] == "math_overflow"

    def test_spot_price_past_supply(self, client):
        state = {**STATE, "tokens_sold": str(CURVE_SUPPLY + 1)}
        response = client.post("/spot-price", json={"state": state})
        assert response.status_code == 400
        assert response.json()["error"] == "insufficient_supply"


class TestGraduationEndpoint:
    """Tests for the graduation endpoint."""

    def test_sold_out_at_threshold(self, client):
        state = {**STATE, "tokens_sold": str(CURVE_SUPPLY), "reserve": str(80 * ONE_SOL)}
        response = client.post("/graduation", json={"state": state})

        assert response.status_code == 200
        data = response.json()
        assert data["should_graduate"] is True
        assert data["usd_raised"] == "1200000000000"
        assert data["graduation_threshold"] == "1200000000000"
        assert data["curve_supply"] == str(CURVE_SUPPLY)

    def test_not_sold_out(self, client):
        state = {**STATE, "tokens_sold": "1", "reserve": str(80 * ONE_SOL)}
        data = client.post("/graduation", json={"state": state}).json()
        assert data["should_graduate"] is False

    def test_usd_raised_above_u64(self, client):
        """A reserve valued beyond u64 is a typed overflow, not a server error."""
        state = {
            "tokens_sold": str(CURVE_SUPPLY),
            "reserve": str(U64_MAX),
            "reference_price": str(U64_MAX),
        }
        response = client.post("/graduation", json={"state": state})
        assert response.status_code == 400
        assert response.json()["error"] == "math_overflow"

    def test_no_reference_price(self, client):
        state = {"tokens_sold": str(CURVE_SUPPLY), "reserve": str(80 * ONE_SOL)}
        data = client.post("/graduation", json={"state": state}).json()
        assert data["should_graduate"] is False
        assert data["usd_raised"] == "0"
