"""Tests for order history, status changes and owner deletion."""

import pytest

from common.errors import AuthorizationError, InvalidStateError, InvalidStatusError, NotFoundError
from common.models.user import ROLE_ADMIN, CurrentUser


@pytest.fixture()
def service(components):
    return components["order_service"]


@pytest.fixture()
def place_order(components, shopper, shipping):
    """Check out one unit of item 3 for a fresh session of ``user_id``."""

    def _place(user_id=100, username="budi", **shipping_overrides):
        user = shopper(user_id=user_id, username=username)
        components["cart_service"].add_item(
            session_id=user.sid, item={"id": 3, "name": "Pupuk Urea 50kg", "price": 350000}
        )
        return components["checkout_service"].checkout(user=user, shipping=dict(shipping, **shipping_overrides))

    return _place


def _raw(components, order_id):
    return next(r for r in components["store"].load("orders") if r["id"] == order_id)


class TestListing:
    def test_list_for_user_only_returns_own_orders(self, service, place_order):
        mine = place_order(user_id=1)
        place_order(user_id=2)

        assert [o.id for o in service.list_for_user(1)] == [mine.id]

    def test_list_all_without_search(self, service, place_order):
        place_order(user_id=1)
        place_order(user_id=2)

        assert len(service.list_all()) == 2

    def test_search_by_username_receiver_city_or_id(self, service, place_order):
        first = place_order(user_id=1, username="sari", deliveryCity="Surabaya")
        second = place_order(user_id=2, username="budi", receiverName="Joko Widodo")

        assert [o.id for o in service.list_all("SARI")] == [first.id]
        assert [o.id for o in service.list_all("surabaya")] == [first.id]
        assert [o.id for o in service.list_all("joko")] == [second.id]
        assert [o.id for o in service.list_all(str(second.id))] == [second.id]


class TestGetOrder:
    def test_owner_and_admin_can_read(self, service, place_order, shopper):
        order = place_order(user_id=1)
        owner = shopper(user_id=1)
        admin = CurrentUser(id=999, username="admin", role=ROLE_ADMIN, sid="x")

        assert service.get_order(order.id, owner).id == order.id
        assert service.get_order(order.id, admin).id == order.id

    def test_other_user_is_forbidden(self, service, place_order, shopper):
        order = place_order(user_id=1)

        with pytest.raises(AuthorizationError):
            service.get_order(order.id, shopper(user_id=2))

    def test_unknown_order(self, service, shopper):
        with pytest.raises(NotFoundError):
            service.get_order(12345, shopper())


class TestSetStatus:
    @pytest.mark.parametrize("status", ["processing", "completed", "cancelled", "pending"])
    def test_valid_statuses(self, service, place_order, status):
        order = place_order()

        updated = service.set_status(order.id, status)

        assert updated.status == status
        assert updated.updated_at is not None

    def test_status_is_case_insensitive(self, service, place_order):
        order = place_order()

        assert service.set_status(order.id, " Completed ").status == "completed"

    @pytest.mark.parametrize("status", ["shipped", "", None, "PENDINGX"])
    def test_invalid_status_leaves_order_unmodified(self, service, components, place_order, status):
        order = place_order()
        before = _raw(components, order.id)

        with pytest.raises(InvalidStatusError):
            service.set_status(order.id, status)

        assert _raw(components, order.id) == before

    def test_unknown_order(self, service):
        with pytest.raises(NotFoundError):
            service.set_status(12345, "completed")

    def test_total_is_not_recomputed(self, service, components, place_order):
        order = place_order()
        components["catalog_service"].update_product(3, {"category": "pupuk", "name": "Urea", "price": 1})

        assert service.set_status(order.id, "processing").total_amount == 350000


class TestDeleteOwn:
    def test_owner_deletes_completed_order(self, service, components, place_order):
        order = place_order(user_id=1)
        service.set_status(order.id, "completed")

        service.delete_own(order.id, 1)

        assert components["order_repo"].get_order(order.id) is None

    def test_owner_deletes_cancelled_order(self, service, components, place_order):
        order = place_order(user_id=1)
        service.set_status(order.id, "cancelled")

        service.delete_own(order.id, 1)

        assert components["order_repo"].get_order(order.id) is None

    @pytest.mark.parametrize("status", ["pending", "processing"])
    def test_in_flight_order_cannot_be_deleted(self, service, components, place_order, status):
        order = place_order(user_id=1)
        service.set_status(order.id, status)

        with pytest.raises(InvalidStateError):
            service.delete_own(order.id, 1)

        assert components["order_repo"].get_order(order.id) is not None

    def test_other_user_cannot_delete(self, service, components, place_order):
        order = place_order(user_id=1)
        service.set_status(order.id, "completed")

        with pytest.raises(AuthorizationError):
            service.delete_own(order.id, 2)

        assert components["order_repo"].get_order(order.id) is not None

    def test_unknown_order(self, service):
        with pytest.raises(NotFoundError):
            service.delete_own(12345, 1)
