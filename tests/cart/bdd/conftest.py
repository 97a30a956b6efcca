"""Shared BDD fixtures and step definitions for the cart."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a guest visitor")
def guest_visitor(session):
    assert not session.is_authenticated


@given(parsers.cfparse("the guest cart holds product {product_id:d} with quantity {qty:d}"))
def guest_cart_holds(local_store, product_id, qty):
    local_store.add(product_id, qty)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the guest cart holds product {product_id:d} with quantity {qty:d}"))
def guest_cart_has_line(local_store, product_id, qty):
    lines = {line.product_id: line.quantity for line in local_store.lines()}
    assert lines.get(product_id) == qty


@then("the guest cart is empty")
def guest_cart_is_empty(local_store):
    assert local_store.is_empty()


@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("the cart subtotal is {amount}"))
def cart_subtotal_is(viewed_cart, amount):
    assert viewed_cart["cart"].subtotal == Decimal(amount)


@pytest.fixture()
def viewed_cart():
    return {"cart": None}
