from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from src.core.constants import MAX_PAGE_SIZE
from src.core.dependencies import (
    get_authorization_service,
    get_gateway_service,
    get_notification_manager,
    get_security_service,
    get_store_service,
    requires_authenticated_account,
)
from src.core.exceptions import errors
from src.domain.enums import AccountState, StoreMethodKind, StorePermission
from src.domain.models import Account, Store, StoreMethod
from src.domain.notifications import StoreDynamicEmailNotification
from src.domain.schemas import AuthSessionState, StoreSearchCriteria
from src.libs.gateways import GatewayMethod
from src.main import app

STORES_URL = "/api/stores"


def make_store(store_id: str = "B2B-store", **kwargs) -> Store:
    store = Store(id=store_id, name=kwargs.pop("name", store_id), **kwargs)
    store.methods = [
        StoreMethod(store_id=store_id, kind=StoreMethodKind.PAYMENT, code="DefaultManualPaymentMethod", is_active=True),
        StoreMethod(store_id=store_id, kind=StoreMethodKind.PAYMENT, code="Stripe", is_active=False),
        StoreMethod(store_id=store_id, kind=StoreMethodKind.SHIPPING, code="FixedRate", is_active=True),
    ]
    return store


class TestStoreEndpoints:
    """Test cases for the stores router"""

    def setup_method(self):
        self.store_service = MagicMock()
        self.store_service.get_by_id = AsyncMock(return_value=None)
        self.store_service.get_by_ids = AsyncMock(return_value=[])
        self.store_service.search_stores = AsyncMock(return_value=([], 0))
        self.store_service.create = AsyncMock(side_effect=lambda store, created_by=None: store)
        self.store_service.update = AsyncMock()
        self.store_service.delete = AsyncMock()
        self.store_service.get_user_allowed_store_ids = AsyncMock(return_value=[])

        self.security_service = MagicMock()
        self.security_service.find_by_id = AsyncMock(return_value=None)

        self.authorization_service = MagicMock()
        self.authorization_service.has_global_permission = AsyncMock(return_value=True)
        self.authorization_service.check_permission_for_objects = AsyncMock()
        self.authorization_service.get_selected_store_ids = AsyncMock(return_value=[])

        self.gateway_service = MagicMock()
        self.gateway_service.get_all_shipping_methods.return_value = [GatewayMethod(code="FixedRate")]
        self.gateway_service.get_all_payment_methods.return_value = [
            GatewayMethod(code="DefaultManualPaymentMethod"),
            GatewayMethod(code="Stripe"),
        ]
        self.gateway_service.get_all_tax_providers.return_value = [GatewayMethod(code="FixedRate", is_active=True)]

        self.notification_manager = MagicMock()
        self.notification_manager.get_new_notification.side_effect = (
            lambda cls, object_id, object_type, language: cls(
                object_id=object_id,
                object_type=object_type,
                language=language or "en-US",
                template_name="v1/stores/dynamic_notification.mjml.html",
            )
        )

        app.dependency_overrides[requires_authenticated_account] = lambda: AuthSessionState(user_name="manager")
        app.dependency_overrides[get_store_service] = lambda: self.store_service
        app.dependency_overrides[get_security_service] = lambda: self.security_service
        app.dependency_overrides[get_authorization_service] = lambda: self.authorization_service
        app.dependency_overrides[get_gateway_service] = lambda: self.gateway_service
        app.dependency_overrides[get_notification_manager] = lambda: self.notification_manager

        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def test_search_stores_with_global_read_permission(self):
        """Test a caller with global read permission searches unrestricted."""
        self.store_service.search_stores.return_value = ([make_store("s1"), make_store("s2")], 7)

        response = self.client.post(f"{STORES_URL}/search", json={"keyword": "s", "take": 2})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalCount"] == 7
        assert [store["id"] for store in data["stores"]] == ["s1", "s2"]

        criteria = self.store_service.search_stores.await_args.args[0]
        assert criteria.keyword == "s"
        assert criteria.store_ids is None
        self.authorization_service.get_selected_store_ids.assert_not_awaited()

    def test_search_stores_restricted_to_selected_stores(self):
        """Test a caller without global read permission only searches its selected stores."""
        self.authorization_service.has_global_permission.return_value = False
        self.authorization_service.get_selected_store_ids.return_value = ["s1"]
        self.store_service.search_stores.return_value = ([make_store("s1")], 1)

        response = self.client.post(f"{STORES_URL}/search", json={"storeIds": ["s1", "s2"]})

        assert response.status_code == 200
        criteria = self.store_service.search_stores.await_args.args[0]
        assert criteria.store_ids == ["s1"]
        self.authorization_service.get_selected_store_ids.assert_awaited_once_with("manager", StorePermission.READ)

    def test_search_stores_without_any_readable_store(self):
        """Test an empty result is returned without searching when nothing is readable."""
        self.authorization_service.has_global_permission.return_value = False

        response = self.client.post(f"{STORES_URL}/search", json={})

        assert response.status_code == 200
        assert response.json()["data"] == {"totalCount": 0, "stores": []}
        self.store_service.search_stores.assert_not_awaited()

    def test_search_stores_requires_authentication(self):
        """Test requests without a bearer token are rejected."""
        del app.dependency_overrides[requires_authenticated_account]

        response = self.client.post(f"{STORES_URL}/search", json={})

        assert response.status_code == 401

    def test_get_stores_lists_everything(self):
        """Test listing stores searches from the start with an unbounded page."""
        self.store_service.search_stores.return_value = ([make_store("s1")], 1)

        response = self.client.get(STORES_URL)

        assert response.status_code == 200
        criteria: StoreSearchCriteria = self.store_service.search_stores.await_args.args[0]
        assert criteria.skip == 0
        assert criteria.take == MAX_PAGE_SIZE
        assert response.json()["data"]["stores"][0]["id"] == "s1"

    def test_get_store_by_id(self):
        """Test a store is returned with its active gateways and security scopes."""
        self.store_service.get_by_id.return_value = make_store("s1")

        response = self.client.get(f"{STORES_URL}/s1")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == "s1"
        assert data["paymentGateways"] == ["DefaultManualPaymentMethod"]
        assert data["shipmentGateways"] == ["FixedRate"]
        assert data["securityScopes"] == ["StoreSelectedScope:s1"]

        user_name, permission_id, objects = self.authorization_service.check_permission_for_objects.await_args.args
        assert (user_name, permission_id) == ("manager", StorePermission.READ)
        assert [store.id for store in objects] == ["s1"]

    def test_get_store_by_id_not_found(self):
        """Test a missing store responds with 404."""
        response = self.client.get(f"{STORES_URL}/missing")

        assert response.status_code == 404

    def test_get_store_by_id_without_permission(self):
        """Test a failed scope-bound read check responds with 401."""
        self.store_service.get_by_id.return_value = make_store("s1")
        self.authorization_service.check_permission_for_objects.side_effect = errors.InsufficientPermissionError()

        response = self.client.get(f"{STORES_URL}/s1")

        assert response.status_code == 401

    def test_create_store(self):
        """Test a store is created with the gateways selected in the request."""
        payload = {
            "id": "new-store",
            "name": "New Store",
            "defaultCurrency": "USD",
            "currencies": ["USD", "EUR"],
            "paymentGateways": ["Stripe"],
            "shipmentGateways": [],
        }

        response = self.client.post(STORES_URL, json=payload)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == "new-store"
        assert data["paymentGateways"] == ["Stripe"]
        assert data["shipmentGateways"] == []

        created, = self.store_service.create.await_args.args
        assert self.store_service.create.await_args.kwargs == {"created_by": "manager"}
        assert {(method.kind, method.code, method.is_active) for method in created.methods} == {
            (StoreMethodKind.SHIPPING, "FixedRate", False),
            (StoreMethodKind.PAYMENT, "DefaultManualPaymentMethod", False),
            (StoreMethodKind.PAYMENT, "Stripe", True),
            (StoreMethodKind.TAX, "FixedRate", True),
        }
        self.authorization_service.has_global_permission.assert_awaited_with("manager", StorePermission.CREATE)

    def test_create_store_without_permission(self):
        """Test creating a store requires the global create permission."""
        self.authorization_service.has_global_permission.return_value = False

        response = self.client.post(STORES_URL, json={"name": "New Store"})

        assert response.status_code == 401
        self.store_service.create.assert_not_awaited()

    def test_update_store(self):
        """Test an update checks the scope-bound permission and responds with 204."""
        response = self.client.put(STORES_URL, json={"id": "s1", "name": "Renamed"})

        assert response.status_code == 204
        user_name, permission_id, objects = self.authorization_service.check_permission_for_objects.await_args.args
        assert (user_name, permission_id) == ("manager", StorePermission.UPDATE)
        assert objects[0].id == "s1"

        stores, = self.store_service.update.await_args.args
        assert stores[0].name == "Renamed"
        assert self.store_service.update.await_args.kwargs == {"modified_by": "manager"}

    def test_update_store_without_permission(self):
        """Test a denied update leaves the store untouched."""
        self.authorization_service.check_permission_for_objects.side_effect = errors.InsufficientPermissionError()

        response = self.client.put(STORES_URL, json={"id": "s1"})

        assert response.status_code == 401
        self.store_service.update.assert_not_awaited()

    def test_update_unknown_store(self):
        """Test updating a store that does not exist responds with 404."""
        self.store_service.update.side_effect = errors.StoreNotFoundError(detail="Store not found. StoreId: s1")

        response = self.client.put(STORES_URL, json={"id": "s1"})

        assert response.status_code == 404

    def test_delete_stores(self):
        """Test deleting checks every existing store and deletes the requested ids."""
        self.store_service.get_by_ids.return_value = [make_store("s1")]

        response = self.client.delete(STORES_URL, params=[("ids", "s1"), ("ids", "missing")])

        assert response.status_code == 204
        self.store_service.get_by_ids.assert_awaited_once_with(["s1", "missing"])
        _, permission_id, objects = self.authorization_service.check_permission_for_objects.await_args.args
        assert permission_id == StorePermission.DELETE
        assert [store.id for store in objects] == ["s1"]
        self.store_service.delete.assert_awaited_once_with(["s1", "missing"])

    def test_delete_stores_without_permission(self):
        """Test a denied delete removes nothing."""
        self.store_service.get_by_ids.return_value = [make_store("s1")]
        self.authorization_service.check_permission_for_objects.side_effect = errors.InsufficientPermissionError()

        response = self.client.delete(STORES_URL, params={"ids": "s1"})

        assert response.status_code == 401
        self.store_service.delete.assert_not_awaited()

    def test_send_dynamic_notification(self):
        """Test a form submission is scheduled to the store email."""
        self.store_service.get_by_id.return_value = make_store("s1", email="shop@example.com", admin_email="a@x.io")

        response = self.client.post(
            f"{STORES_URL}/send/dynamicnotification",
            json={"storeId": "s1", "type": "ContactUs", "language": "de-DE", "fields": {"Message": "Hello"}},
        )

        assert response.status_code == 204
        self.notification_manager.get_new_notification.assert_called_once_with(
            StoreDynamicEmailNotification, object_id="s1", object_type="Store", language="de-DE"
        )
        notification, = self.notification_manager.schedule_send_notification.call_args.args
        assert notification.recipient == "shop@example.com"
        assert notification.sender == "shop@example.com"
        assert notification.is_active is True
        assert notification.form_type == "ContactUs"
        assert notification.fields == {"Message": "Hello"}

    def test_send_dynamic_notification_falls_back_to_admin_email(self):
        """Test the admin email is used when the store has no email."""
        self.store_service.get_by_id.return_value = make_store("s1", admin_email="admin@example.com")

        response = self.client.post(
            f"{STORES_URL}/send/dynamicnotification",
            json={"storeId": "s1", "type": "ContactUs"},
        )

        assert response.status_code == 204
        notification, = self.notification_manager.schedule_send_notification.call_args.args
        assert notification.recipient == "admin@example.com"
        assert notification.sender == "admin@example.com"

    def test_send_dynamic_notification_unknown_store(self):
        """Test sending for an unknown store fails with a descriptive error."""
        response = self.client.post(
            f"{STORES_URL}/send/dynamicnotification",
            json={"storeId": "missing", "type": "ContactUs"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Store not found. StoreId: missing"
        self.notification_manager.schedule_send_notification.assert_not_called()

    def test_send_dynamic_notification_without_store_emails(self):
        """Test sending fails when the store has neither email nor admin email."""
        self.store_service.get_by_id.return_value = make_store("s1")

        response = self.client.post(
            f"{STORES_URL}/send/dynamicnotification",
            json={"storeId": "s1", "type": "ContactUs"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Both store email and admin email are empty. StoreId: s1"

    def test_get_login_on_behalf_info(self):
        """Test the login on behalf check runs for the account's user name."""
        self.security_service.find_by_id.return_value = Account(id="acc-1", user_name="jane")

        response = self.client.get(f"{STORES_URL}/s1/accounts/acc-1/loginonbehalf")

        assert response.status_code == 200
        assert response.json()["data"] == {"userName": "acc-1", "canLoginOnBehalf": True}
        self.authorization_service.has_global_permission.assert_awaited_with("jane", StorePermission.LOGIN_ON_BEHALF)

    def test_get_login_on_behalf_info_unknown_account(self):
        """Test an unknown account cannot log in on behalf."""
        response = self.client.get(f"{STORES_URL}/s1/accounts/ghost/loginonbehalf")

        assert response.status_code == 200
        assert response.json()["data"] == {"userName": "ghost", "canLoginOnBehalf": False}

    def test_get_user_allowed_stores(self):
        """Test the allowed stores of an account are returned."""
        account = Account(id="acc-1", user_name="jane", store_id="s1", user_state=AccountState.APPROVED)
        self.security_service.find_by_id.return_value = account
        self.store_service.get_user_allowed_store_ids.return_value = ["s1", "s2"]
        self.store_service.get_by_ids.return_value = [make_store("s1"), make_store("s2")]

        response = self.client.get(f"{STORES_URL}/allowed/acc-1")

        assert response.status_code == 200
        assert [store["id"] for store in response.json()["data"]] == ["s1", "s2"]
        self.store_service.get_user_allowed_store_ids.assert_awaited_once_with(account)
        self.store_service.get_by_ids.assert_awaited_once_with(["s1", "s2"])

    def test_get_user_allowed_stores_unknown_account(self):
        """Test an unknown account has no allowed stores."""
        response = self.client.get(f"{STORES_URL}/allowed/ghost")

        assert response.status_code == 200
        assert response.json()["data"] == []
        self.store_service.get_user_allowed_store_ids.assert_not_awaited()

    def test_unexpected_failure_is_wrapped(self):
        """Test unexpected service failures surface as service errors."""
        self.store_service.search_stores.side_effect = RuntimeError("boom")

        response = self.client.post(f"{STORES_URL}/search", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Failed to search stores"

    def test_root_routes_answer_without_redirect(self):
        """Test the collection routes are served at the bare prefix."""
        client = TestClient(app, follow_redirects=False)

        assert client.get(STORES_URL).status_code == 200
        assert client.post(STORES_URL, json={"id": "s1"}).status_code == 200
        assert client.put(STORES_URL, json={"id": "s1"}).status_code == 204
        assert client.delete(STORES_URL, params={"ids": "s1"}).status_code == 204
