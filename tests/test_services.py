"""Tests for the endpoint table, resource services and request builders."""

import pydantic
import pytest

from conftest import make_response
from gocardless_payments import errors, models
from gocardless_payments.endpoints import RESOURCES, Endpoint
from gocardless_payments.services import RequestBuilder, Service
from gocardless_payments.utils import path_placeholders


class TestEndpointTable:
    """Sanity checks over every declared endpoint."""

    @pytest.mark.parametrize(
        "resource,operation,endpoint",
        [
            (resource, operation, endpoint)
            for resource, operations in RESOURCES.items()
            for operation, endpoint in operations.items()
        ],
    )
    def test_endpoint_is_consistent(self, resource, operation, endpoint):
        assert isinstance(endpoint, Endpoint)
        assert endpoint.method in ("GET", "POST", "PUT", "DELETE")
        assert not endpoint.path.startswith("/")
        assert issubclass(endpoint.model, models.Resource)
        if endpoint.paginated:
            assert endpoint.method == "GET"
        if endpoint.idempotent:
            assert endpoint.method == "POST"
            assert endpoint.conflict_path == f"{endpoint.path}/:identity"
        else:
            assert endpoint.conflict_path is None
        if endpoint.method in ("GET",):
            assert not endpoint.has_body

    def test_core_resources_are_declared(self):
        for name in (
            "payments",
            "mandates",
            "customers",
            "customer_bank_accounts",
            "subscriptions",
            "refunds",
            "billing_requests",
            "events",
            "payouts",
        ):
            assert name in RESOURCES

    def test_actions_use_data_envelope(self):
        assert RESOURCES["payments"]["cancel"].request_envelope == "data"
        assert RESOURCES["payments"]["create"].request_envelope == "payments"
        assert RESOURCES["payments"]["update"].request_envelope == "payments"


class TestService:
    """Tests for generated per-resource services."""

    def test_operations_return_builders(self, client):
        builder = client.payments.get("PM123")
        assert isinstance(builder, RequestBuilder)
        assert builder.endpoint is RESOURCES["payments"]["get"]

    def test_unknown_operation(self, client):
        with pytest.raises(AttributeError):
            client.payments.explode

    def test_unknown_resource(self, client):
        with pytest.raises(errors.InvalidRequestError):
            Service(client, "widgets")

    def test_too_few_path_values(self, client):
        with pytest.raises(errors.InvalidRequestError):
            client.payments.get()

    def test_too_many_path_values(self, client):
        with pytest.raises(errors.InvalidRequestError):
            client.payments.list("PM123")

    def test_path_values_bind_in_order(self, client):
        descriptor = client.billing_requests.fulfil("BRQ 1/x").build()
        assert descriptor.path_params == {"identity": "BRQ 1/x"}
        assert descriptor.path == "billing_requests/BRQ%201%2Fx/actions/fulfil"

    def test_all_requires_list(self, client):
        with pytest.raises(AttributeError):
            client.funds_availability.all()

    def test_dir_lists_operations(self, client):
        assert {"create", "list", "get", "cancel"} <= set(dir(client.payments))


class TestRequestBuilder:
    """Tests for builder state and descriptor snapshots."""

    def test_list_params_go_to_query(self, client):
        descriptor = client.payments.list(status="paid").with_limit(10).build()
        assert descriptor.query_params == {"status": "paid", "limit": 10}
        assert descriptor.body is None
        assert descriptor.paginated

    def test_create_params_go_to_body(self, client):
        descriptor = client.customers.create(email="a@example.com").build()
        assert descriptor.body == {"email": "a@example.com"}
        assert descriptor.query_params == {}
        assert descriptor.request_envelope == "customers"
        assert descriptor.response_model is models.Customer

    def test_none_unsets_param(self, client):
        builder = client.payments.list(status="paid", limit=5)
        builder.with_param("status", None).with_after("c1").with_before(None)
        assert builder.build().query_params == {"limit": 5, "after": "c1"}

    def test_with_metadata_merges(self, client):
        builder = client.payments.create(metadata={"order": "42"})
        builder.with_metadata("source", "web")
        assert builder.build().body["metadata"] == {"order": "42", "source": "web"}

    def test_snapshot_is_isolated_from_builder(self, client):
        """Changing a builder after build() does not alter earlier descriptors."""
        builder = client.payments.create(amount=1000, links={"mandate": "MD1"})
        first = builder.build()

        builder.with_param("amount", 2000).with_header("X-Trace", "1")
        builder._params["links"]["mandate"] = "MD2"

        assert first.body == {"amount": 1000, "links": {"mandate": "MD1"}}
        assert first.headers == {}
        assert builder.build().body["amount"] == 2000

    def test_descriptor_is_frozen(self, client):
        descriptor = client.payments.get("PM1").build()
        with pytest.raises(pydantic.ValidationError):
            descriptor.method = "DELETE"

    def test_descriptor_mappings_are_read_only(self, client):
        descriptor = client.payments.list(limit=1, created_at={"gte": "2026-01-01"}).build()

        with pytest.raises(TypeError):
            descriptor.query_params["limit"] = 99
        with pytest.raises(TypeError):
            descriptor.query_params["created_at"]["gte"] = "2020-01-01"
        with pytest.raises(TypeError):
            descriptor.headers["X-Trace"] = "1"
        with pytest.raises(TypeError):
            descriptor.path_params["identity"] = "PM2"

        assert descriptor.encoded_query() == {"limit": "1", "created_at[gte]": "2026-01-01"}

    def test_body_is_read_only_but_sent_as_plain_json(self, client):
        descriptor = client.payments.create(
            amount=1000, links={"mandate": "MD1"}, tags=["a", "b"]
        ).build()

        with pytest.raises(TypeError):
            descriptor.body["amount"] = 1

        sent = descriptor.envelope_body()
        assert sent == {
            "payments": {"amount": 1000, "links": {"mandate": "MD1"}, "tags": ["a", "b"]}
        }
        assert type(sent["payments"]["links"]) is dict
        sent["payments"]["amount"] = 1
        assert descriptor.body["amount"] == 1000

    def test_cursor_copy_is_read_only(self, client):
        descriptor = client.payments.list(limit=1).build().with_cursor("c1")

        assert descriptor.encoded_query() == {"limit": "1", "after": "c1"}
        with pytest.raises(TypeError):
            descriptor.query_params["after"] = "c2"

    def test_generated_idempotency_key_is_reused(self, client):
        builder = client.payments.create(amount=1000)
        first = builder.build().idempotency_key
        assert first
        assert builder.build().idempotency_key == first

    def test_explicit_idempotency_key(self, client):
        descriptor = client.mandates.create().with_idempotency_key("key-1").build()
        assert descriptor.idempotency_key == "key-1"
        assert descriptor.conflict_path_template == "mandates/:identity"

    def test_idempotency_key_rejected_on_non_creation(self, client):
        with pytest.raises(errors.InvalidRequestError):
            client.payments.cancel("PM1").with_idempotency_key("key-1")

    def test_non_idempotent_endpoint_has_no_key(self, client):
        descriptor = client.payments.cancel("PM1").build()
        assert descriptor.idempotency_key is None
        assert descriptor.conflict_path_template is None

    def test_builder_can_be_resent(self, client, payment_payload):
        client.session.request.return_value = make_response(json_data=payment_payload)
        builder = client.payments.create(amount=1000)

        builder.execute()
        builder.execute()

        keys = [
            call.kwargs["headers"]["Idempotency-Key"]
            for call in client.session.request.call_args_list
        ]
        assert len(keys) == 2
        assert keys[0] == keys[1]

    def test_path_params_match_template(self):
        for operations in RESOURCES.values():
            for endpoint in operations.values():
                assert endpoint.path_params == path_placeholders(endpoint.path)
