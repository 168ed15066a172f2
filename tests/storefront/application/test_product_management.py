"""Application tests for catalogue management commands."""

import pytest
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from storefront.errors import ProductNotFound
from storefront.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.product.product import Product
from storefront.product.seed import SAMPLE_PRODUCTS, seed_products


class TestCreateProductHandler:
    def test_create_product(self, create_product):
        product_id = create_product(name="Orange Juice", category="beverages", price=4.49, stock=60)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Orange Juice"
        assert product.category == "beverages"
        assert product.stock == 60

    def test_create_product_with_invalid_category(self):
        with pytest.raises(ValidationError):
            current_domain.process(
                CreateProduct(
                    name="Plush Toy",
                    description="A soft toy that has no place in a grocery store.",
                    price=9.99,
                    category="toys",
                    stock=1,
                    image_url="https://example.com/toy.jpg",
                ),
                asynchronous=False,
            )


class TestUpdateProductHandler:
    def test_partial_update(self, create_product):
        product_id = create_product(price=4.99, stock=100)

        current_domain.process(UpdateProduct(product_id=product_id, stock=40), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.stock == 40
        assert product.price == 4.99

    def test_update_unknown_product(self):
        with pytest.raises(ProductNotFound) as exc:
            current_domain.process(UpdateProduct(product_id="missing", price=1.0), asynchronous=False)
        assert exc.value.message == "Product with ID missing not found"

    def test_negative_stock_rejected(self, create_product):
        product_id = create_product(stock=10)

        with pytest.raises(ValidationError):
            current_domain.process(UpdateProduct(product_id=product_id, stock=-1), asynchronous=False)

        assert current_domain.repository_for(Product).get(product_id).stock == 10


class TestDeleteProductHandler:
    def test_delete_product(self, create_product):
        product_id = create_product()

        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ProductNotFound):
            current_domain.repository_for(Product).fetch(product_id)

    def test_delete_unknown_product(self):
        with pytest.raises(ProductNotFound):
            current_domain.process(DeleteProduct(product_id="missing"), asynchronous=False)


class TestSeedProducts:
    def test_seed_empty_catalogue(self):
        created = seed_products()

        assert created == len(SAMPLE_PRODUCTS)
        assert current_domain.repository_for(Product).count() == len(SAMPLE_PRODUCTS)

    def test_seed_is_idempotent(self):
        seed_products()

        assert seed_products() == 0
        assert current_domain.repository_for(Product).count() == len(SAMPLE_PRODUCTS)
