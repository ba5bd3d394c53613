import pytest
from ordering.coupon.coupon import Coupon
from ordering.directory import get_directory
from ordering.directory.port import AddressRecord, CustomerRecord, LocationRecord
from ordering.menu.menu import Menu
from ordering.settings import WorkflowSettings
from ordering.status.management import DefineStatus
from ordering.workflow.engine import OrderWorkflowEngine
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Workflow fixtures
# ---------------------------------------------------------------------------
PENDING, PREPARATION, COMPLETED, CANCELED = "1", "2", "5", "9"


@pytest.fixture
def settings():
    return WorkflowSettings(
        processing_order_status={PREPARATION},
        completed_order_status={COMPLETED},
        auto_invoicing=True,
        invoice_prefix="INV{year}{month}{day}",
        site_name="OrderDesk Kitchen",
        site_email="kitchen@orderdesk.test",
    )


@pytest.fixture
def statuses():
    """Pending, Preparation, Completed and Canceled, with fixed ids."""
    definitions = [
        (PENDING, "Pending", "Your order has been received.", False),
        (PREPARATION, "Preparation", "Your order {order_number} is in the kitchen.", True),
        (COMPLETED, "Completed", "", False),
        (CANCELED, "Canceled", "Your order was canceled.", True),
    ]
    for status_id, name, comment, notify in definitions:
        current_domain.process(
            DefineStatus(status_id=status_id, name=name, comment=comment, notify_customer=notify),
            asynchronous=False,
        )
    return {"pending": PENDING, "preparation": PREPARATION, "completed": COMPLETED, "canceled": CANCELED}


@pytest.fixture
def mailer():
    from notifications.channel import get_mailer

    return get_mailer()


@pytest.fixture
def directory():
    directory = get_directory()
    directory.add_customer(
        CustomerRecord(
            customer_id="cust-1",
            first_name="Ada",
            last_name="Lovelace",
            email="Ada@Example.com",
            telephone="555-0100",
        )
    )
    directory.add_address(
        AddressRecord(address_id="addr-1", address_1="12 Analytical Row", city="London", postcode="N1 7AA")
    )
    directory.add_location(LocationRecord(location_id="loc-1", name="Soho Kitchen", email="soho@orderdesk.test"))
    return directory


@pytest.fixture
def engine(settings):
    return OrderWorkflowEngine(settings)


@pytest.fixture
def make_menu():
    def _make_menu(name="Margherita", stock_qty=10, subtract_stock=True, price=9.5):
        menu = Menu(name=name, price=price, stock_qty=stock_qty, subtract_stock=subtract_stock)
        current_domain.repository_for(Menu).add(menu)
        return menu

    return _make_menu


@pytest.fixture
def make_coupon():
    def _make_coupon(code="SAVE5", discount=5.0, min_total=20.0):
        coupon = Coupon(code=code, name=f"{code} coupon", discount=discount, min_total=min_total)
        current_domain.repository_for(Coupon).add(coupon)
        return coupon

    return _make_coupon


@pytest.fixture
def line_item():
    def _line_item(menu, quantity=1, **overrides):
        item = {"menu_id": str(menu.id), "name": menu.name, "quantity": quantity, "price": menu.price}
        item.update(overrides)
        return item

    return _line_item


@pytest.fixture
def stock_of():
    def _stock_of(menu):
        return current_domain.repository_for(Menu).get(str(menu.id)).stock_qty

    return _stock_of
