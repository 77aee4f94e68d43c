from collections import namedtuple

import pytest
from sqlalchemy import select

from inventory.core.exceptions import InvalidArgumentError, NotFoundError
from inventory.crud.product import ProductStore, _barcode_fk, _has_linked_barcode
from inventory.models.product import ProductRow

from conftest import make_barcode, make_product


JoinedRow = namedtuple("JoinedRow", ["linked_barcode_id"])


def _stored_fk(session_factory, product_id):
    db = session_factory()
    try:
        return db.execute(
            select(ProductRow.barcode_id).where(ProductRow.id == product_id)
        ).scalar_one()
    finally:
        db.close()


class TestJoinedRowPredicate:
    @pytest.mark.parametrize("joined_id, expected", [(None, False), (0, False), (7, True)])
    def test_presence_is_decided_by_joined_id(self, joined_id, expected):
        assert _has_linked_barcode(JoinedRow(joined_id)) is expected

    def test_fk_is_null_for_unsaved_barcode(self):
        assert _barcode_fk(None) is None
        assert _barcode_fk(make_barcode()) is None
        assert _barcode_fk(make_barcode(id=3)) == 3


class TestConstruction:
    def test_requires_barcode_store(self):
        with pytest.raises(ValueError):
            ProductStore(None)

    def test_shares_barcode_store_session_factory(self, barcode_store, product_store):
        assert product_store.session_factory is barcode_store.session_factory


class TestInsertAndRead:
    def test_product_without_barcode(self, product_store, session_factory):
        product = make_product()
        product_store.insert(product)

        assert product.id > 0
        assert _stored_fk(session_factory, product.id) is None
        stored = product_store.get_by_id(product.id)
        assert stored == product
        assert stored.barcode is None

    def test_product_with_persisted_barcode(self, barcode_store, product_store, session_factory):
        barcode = make_barcode()
        barcode_store.insert(barcode)
        product = make_product(barcode=barcode)
        product_store.insert(product)

        assert _stored_fk(session_factory, product.id) == barcode.id
        assert product_store.get_by_id(product.id).barcode == barcode

    def test_unsaved_barcode_writes_null_fk(self, product_store, session_factory):
        product = make_product(barcode=make_barcode())
        product_store.insert(product)

        assert _stored_fk(session_factory, product.id) is None
        assert product_store.get_by_id(product.id).barcode is None

    def test_get_all_mixes_linked_and_unlinked(self, barcode_store, product_store):
        barcode = make_barcode()
        barcode_store.insert(barcode)
        linked = make_product(name="Linked", barcode=barcode)
        unlinked = make_product(name="Unlinked")
        product_store.insert(linked)
        product_store.insert(unlinked)

        products = product_store.get_all()
        assert [p.name for p in products] == ["Linked", "Unlinked"]
        assert products[0].barcode == barcode
        assert products[1].barcode is None

    def test_barcode_deleted_directly_is_not_loaded(self, barcode_store, product_store, session_factory):
        barcode = make_barcode()
        barcode_store.insert(barcode)
        product = make_product(barcode=barcode)
        product_store.insert(product)

        barcode_store.soft_delete(barcode.id)

        assert product_store.get_by_id(product.id).barcode is None
        # The foreign key is left dangling
        assert _stored_fk(session_factory, product.id) == barcode.id


class TestUpdateAndDelete:
    def test_update_rewrites_fields_and_fk(self, barcode_store, product_store, session_factory):
        barcode = make_barcode()
        barcode_store.insert(barcode)
        product = make_product(barcode=barcode)
        product_store.insert(product)

        product.price = 3.75
        product.barcode = None
        product_store.update(product)

        stored = product_store.get_by_id(product.id)
        assert stored.price == 3.75
        assert stored.barcode is None
        assert _stored_fk(session_factory, product.id) is None

    def test_update_unknown_raises_not_found(self, product_store):
        with pytest.raises(NotFoundError):
            product_store.update(make_product(id=404))

    def test_soft_delete_does_not_cascade(self, barcode_store, product_store):
        barcode = make_barcode()
        barcode_store.insert(barcode)
        product = make_product(barcode=barcode)
        product_store.insert(product)

        product_store.soft_delete(product.id)

        assert product_store.get_by_id(product.id) is None
        assert product_store.get_all() == []
        assert barcode_store.get_by_id(barcode.id) == barcode

    def test_soft_delete_twice_raises_not_found(self, product_store):
        product = make_product()
        product_store.insert(product)
        product_store.soft_delete(product.id)

        with pytest.raises(NotFoundError):
            product_store.soft_delete(product.id)

    def test_update_deleted_raises_not_found(self, product_store):
        product = make_product()
        product_store.insert(product)
        product_store.soft_delete(product.id)

        with pytest.raises(NotFoundError):
            product_store.update(product)


class TestLinkedProductId:
    def test_finds_active_owner(self, barcode_store, product_store):
        barcode = make_barcode()
        barcode_store.insert(barcode)
        product = make_product(barcode=barcode)
        product_store.insert(product)

        assert product_store.linked_product_id(barcode.id) == product.id
        assert product_store.linked_product_id(barcode.id, exclude_product_id=product.id) is None

    def test_ignores_deleted_products(self, barcode_store, product_store):
        barcode = make_barcode()
        barcode_store.insert(barcode)
        product = make_product(barcode=barcode)
        product_store.insert(product)
        product_store.soft_delete(product.id)

        assert product_store.linked_product_id(barcode.id) is None

    def test_unlinked_barcode(self, product_store):
        assert product_store.linked_product_id(7) is None


class TestSearchByNameOrBrand:
    @pytest.fixture
    def catalog(self, product_store):
        products = [
            make_product(name="Red Apple Juice", brand="Orchard"),
            make_product(name="Cola", brand="RedBull Co"),
            make_product(name="reddish radish", brand="Farm"),
            make_product(name="Blue Cheese", brand="Dairy"),
            make_product(name="100% Orange", brand="Sunny"),
        ]
        for product in products:
            product_store.insert(product)
        return products

    def test_matches_name_or_brand(self, product_store, catalog):
        names = [p.name for p in product_store.search_by_name_or_brand("Red")]
        assert names == ["Red Apple Juice", "Cola"]

    def test_is_case_sensitive(self, product_store, catalog):
        names = [p.name for p in product_store.search_by_name_or_brand("red")]
        assert names == ["reddish radish"]

    def test_wildcards_are_literal(self, product_store, catalog):
        names = [p.name for p in product_store.search_by_name_or_brand("%")]
        assert names == ["100% Orange"]

    def test_excludes_deleted(self, product_store, catalog):
        product_store.soft_delete(catalog[0].id)
        names = [p.name for p in product_store.search_by_name_or_brand("Red")]
        assert names == ["Cola"]

    @pytest.mark.parametrize("pattern", ["", "   ", None])
    def test_blank_pattern_rejected(self, product_store, pattern):
        with pytest.raises(InvalidArgumentError):
            product_store.search_by_name_or_brand(pattern)
