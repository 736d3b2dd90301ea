import pytest

from apps.catalog.models import Product, Shop


@pytest.mark.django_db
class TestCatalog:
    def test_browse_without_login(self, anonymous_client, products):
        response = anonymous_client.get("/api/v1/products/")
        assert response.status_code == 200
        assert {p["name"] for p in response.data} == {"Chew Toy", "Salmon Kibble"}
        assert anonymous_client.get("/api/v1/shops").status_code == 200

    @pytest.mark.parametrize(
        "query, names",
        [
            ("category=FOOD", ["Salmon Kibble"]),
            ("featured=true", ["Salmon Kibble"]),
            ("featured=false", ["Chew Toy"]),
        ],
    )
    def test_filters(self, anonymous_client, products, query, names):
        response = anonymous_client.get(f"/api/v1/products?{query}")
        assert [p["name"] for p in response.data] == names

    def test_hidden_products(self, anonymous_client, shop, products):
        Product.objects.filter(name="Chew Toy").update(is_available=False)
        other = Shop.objects.create(name="Closed Shop", is_active=False)
        Product.objects.create(shop=other, name="Catnip", price="2.00")

        response = anonymous_client.get("/api/v1/products")
        assert [p["name"] for p in response.data] == ["Salmon Kibble"]
        assert anonymous_client.get(f"/api/v1/shops/{other.pk}").status_code == 404

    def test_shop_filter(self, anonymous_client, shop, products):
        other = Shop.objects.create(name="Bark Bazaar")
        Product.objects.create(shop=other, name="Leash", price="12.00")
        response = anonymous_client.get(f"/api/v1/products?shop={other.pk}")
        assert [p["name"] for p in response.data] == ["Leash"]
