"""Application tests for catalogue management and search."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.management import DeleteProduct, ToggleProductStock, UpdateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.view import product_detail, resolve_products


def _repo():
    return current_domain.repository_for(Product)


class TestCreateProduct:
    def test_persists_lists(self, make_product):
        product_id = make_product(images=json.dumps(["https://cdn.example.com/a.jpg"]))

        product = _repo().get(product_id)
        assert product.images == ["https://cdn.example.com/a.jpg"]
        assert product.in_stock

    def test_missing_description_is_rejected(self, make_product):
        with pytest.raises(ValidationError):
            make_product(description=None)


class TestUpdateProduct:
    def test_partial_update(self, camera_id):
        current_domain.process(UpdateProduct(product_id=camera_id, price=999.0), asynchronous=False)

        product = _repo().get(camera_id)
        assert product.price == 999.0
        assert product.name == "Mirrorless Body X100"

    def test_unknown_product_is_not_found(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id="missing", price=1.0), asynchronous=False)


class TestToggleStock:
    def test_toggle_out_and_back(self, camera_id):
        current_domain.process(ToggleProductStock(product_id=camera_id), asynchronous=False)
        assert _repo().get(camera_id).stock == 0

        current_domain.process(ToggleProductStock(product_id=camera_id, restock_quantity=4), asynchronous=False)
        assert _repo().get(camera_id).stock == 4


class TestDeleteProduct:
    def test_delete_removes_product(self, camera_id):
        current_domain.process(DeleteProduct(product_id=camera_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            _repo().get(camera_id)


class TestSearch:
    def test_keyword_matches_name_or_description_case_insensitively(self, make_product):
        body = make_product(name="Mirrorless Body X100")
        make_product(name="Tripod", description="Aluminium travel tripod")
        lens = make_product(name="Prime 50mm", description="Fast lens for MIRRORLESS mounts")

        products, total = _repo().search(keyword="mirrorless")

        assert total == 2
        assert {str(p.id) for p in products} == {body, lens}

    def test_filters_by_category_and_brand(self, make_product):
        make_product(name="Body", category="Camera", brand="Optika")
        lens = make_product(name="Lens", category="Lens", brand="Optika")
        make_product(name="Other Lens", category="Lens", brand="Glassworks")

        products, total = _repo().search(category="Lens", brand="Optika")

        assert total == 1
        assert str(products[0].id) == lens

    def test_pagination_reports_full_total(self, make_product):
        for i in range(5):
            make_product(name=f"Filter {i}", category="Accessory")

        first_page, total = _repo().search(category="Accessory", page=1, limit=2)
        last_page, _ = _repo().search(category="Accessory", page=3, limit=2)

        assert total == 5
        assert len(first_page) == 2
        assert len(last_page) == 1

    def test_defaults_return_everything_small(self, camera_id, lens_id):
        products, total = _repo().search()
        assert total == 2
        assert len(products) == 2


class TestResolve:
    def test_resolve_skips_missing_ids(self, camera_id):
        resolved = _repo().resolve([camera_id, "missing"])
        assert list(resolved) == [camera_id]

    def test_resolve_empty(self):
        assert _repo().resolve([]) == {}

    def test_resolve_products_keeps_order(self, camera_id, lens_id):
        summaries = resolve_products([lens_id, "missing", camera_id])
        assert [s["id"] for s in summaries] == [lens_id, camera_id]


class TestCompatibility:
    def test_listing_on_either_side_is_enough(self, make_product, lens_id):
        body_id = make_product(compatibility=json.dumps([lens_id]))

        assert _repo().are_compatible(body_id, lens_id) is True
        assert _repo().are_compatible(lens_id, body_id) is True

    def test_unrelated_products_are_not_compatible(self, camera_id, lens_id):
        assert _repo().are_compatible(camera_id, lens_id) is False

    def test_unknown_product_is_not_found(self, camera_id):
        with pytest.raises(ObjectNotFoundError):
            _repo().are_compatible(camera_id, "no-such-product")


class TestProductDetail:
    def test_compatibility_is_expanded(self, make_product, lens_id):
        body_id = make_product(compatibility=json.dumps([lens_id, "missing"]))

        detail = product_detail(_repo().get(body_id))

        assert detail["compatibility"] == [{"id": lens_id, "name": "50mm f/1.8 Prime", "brand": "Optika"}]
