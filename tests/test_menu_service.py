"""Menu browsing, reviews and admin menu management."""

from decimal import Decimal

import pytest

from storefront.domain.schemas import ProductIn, ProductUpdate, ReviewIn


def _product_fetches(fake_api):
    return [c for c in fake_api.calls if c[0] == "get_products"]


class TestListing:
    def test_sorted_by_rating_by_default(self, state):
        names = [p.name for p in state.menu.list_products()]
        # unrated items count as 0
        assert names == ["Lobster", "Margherita", "Tiramisu"]

    def test_price_sorting(self, state):
        assert [p.id for p in state.menu.list_products("price_asc")] == ["p2", "p1", "p3"]
        assert [p.id for p in state.menu.list_products("price_desc")] == ["p3", "p1", "p2"]

    def test_unknown_sort(self, state):
        with pytest.raises(ValueError):
            state.menu.list_products("random")

    def test_list_is_cached(self, state, fake_api):
        state.menu.list_products()
        state.menu.list_products("price_asc")
        assert len(_product_fetches(fake_api)) == 1

    def test_get_product(self, state):
        product = state.menu.get_product("p2")
        assert product.price == Decimal("6.5")


class TestReviews:
    def test_guest_can_post_and_cache_is_dropped(self, state, fake_api):
        state.menu.list_products()
        state.menu.add_review("p1", ReviewIn(rating=4, comment=" Lovely "))

        assert fake_api.calls[-1] == ("add_review", "p1", {"rating": 4, "comment": "Lovely"}, "")
        state.menu.list_products()
        assert len(_product_fetches(fake_api)) == 2

    def test_delete_review_needs_login(self, state, login_as, fake_api):
        state.menu.add_review("p1", ReviewIn(rating=5, comment="Great"))
        with pytest.raises(PermissionError):
            state.menu.delete_review("p1", "r1")

        login_as()
        state.menu.delete_review("p1", "r1")
        assert fake_api.products["p1"]["reviews"] == []


class TestAdminMenu:
    def test_regular_user_cannot_manage_menu(self, state, login_as):
        login_as()
        with pytest.raises(PermissionError):
            state.menu.create_product(ProductIn(name="Soup", price=Decimal("4")))

    def test_create_sends_json_numbers(self, state, login_as, fake_api):
        login_as("admin@example.com")
        created = state.menu.create_product(ProductIn(name="Soup", price=Decimal("4.25")))

        assert created.name == "Soup"
        sent = [c for c in fake_api.calls if c[0] == "create_product"][0][1]
        assert sent == {"name": "Soup", "price": 4.25}

    def test_update_requires_changes(self, state, login_as):
        login_as("admin@example.com")
        with pytest.raises(ValueError):
            state.menu.update_product("p1", ProductUpdate())

    def test_update_price_invalidates_cache(self, state, login_as):
        login_as("admin@example.com")
        assert state.menu.list_products("price_asc")[0].id == "p2"

        state.menu.update_price("p2", Decimal("99"))
        assert state.menu.list_products("price_asc")[0].id == "p1"

    def test_delete(self, state, login_as, fake_api):
        login_as("admin@example.com")
        state.menu.delete_product("p3")
        assert [p.id for p in state.menu.list_products()] == ["p1", "p2"]

    def test_image_upload_and_attach(self, state, login_as, fake_api):
        login_as("admin@example.com")
        url = state.menu.upload_image("soup.jpg", b"\xff\xd8", "image/jpeg")
        state.menu.add_image("p1", url)

        assert fake_api.products["p1"]["images"] == ["https://assets.example.com/soup.jpg"]
        state.menu.delete_image("p1", 0)
        assert fake_api.products["p1"]["images"] == []

    def test_empty_upload(self, state, login_as):
        login_as("admin@example.com")
        with pytest.raises(ValueError):
            state.menu.upload_image("x.jpg", b"", "image/jpeg")
