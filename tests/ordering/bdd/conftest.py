"""Shared BDD fixtures and step definitions for the order workflow."""

import pytest
from pytest_bdd import given, parsers


@pytest.fixture
def menus():
    return {}


@pytest.fixture
def context():
    """Mutable scenario state shared between steps."""
    return {"orders": [], "results": []}


@given("the kitchen statuses are defined")
def _(statuses):
    return statuses


@given(parsers.cfparse('a menu "{name}" with {stock:d} in stock'))
def _(menus, make_menu, name, stock):
    menus[name] = make_menu(name=name, stock_qty=stock)


@given(parsers.re(r'an order for (?P<first_qty>\d+) "(?P<first>[^"]+)" and (?P<second_qty>\d+) "(?P<second>[^"]+)"'))
def _(engine, menus, line_item, context, first_qty, first, second_qty, second):
    created = engine.create_order(customer_id="cust-1")
    engine.attach_line_items(
        created["order_id"],
        [line_item(menus[first], int(first_qty)), line_item(menus[second], int(second_qty))],
    )
    context["orders"].append(created["order_id"])


@given(parsers.cfparse('another order for {quantity:d} "{name}"'))
def _(engine, menus, line_item, context, quantity, name):
    created = engine.create_order(customer_id="cust-2")
    engine.attach_line_items(created["order_id"], [line_item(menus[name], quantity)])
    context["orders"].append(created["order_id"])

