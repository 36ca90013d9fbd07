"""Order pricing: subtotal, discount, tax and total.

Every function here is pure. Inputs are trusted to be well typed (the
request schemas enforce that); business validity of a discount code is
the discount service's concern, not this module's.
"""

import logging
from collections.abc import Iterable, Mapping
from decimal import Decimal

from enhanced_commerce.schemas.customer import Address
from enhanced_commerce.schemas.discount import DiscountCode
from enhanced_commerce.schemas.pricing import AdditionalLineItem, LineItem, OrderTotals

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def calculate_subtotal(
    line_items: Iterable[LineItem],
    additional_line_items: Iterable[AdditionalLineItem] = (),
) -> Decimal:
    """Sum unit_price × quantity over line items plus additional item totals."""
    items_subtotal = sum((item.unit_price * item.quantity for item in line_items), ZERO)
    additional_subtotal = sum((item.total_price for item in additional_line_items), ZERO)
    return items_subtotal + additional_subtotal


def calculate_discount(subtotal: Decimal, discount_code: DiscountCode | None) -> Decimal:
    """Discount amount a code grants on the given subtotal.

    Percentage codes are capped at maximum_discount when one is set; fixed
    codes never exceed the subtotal.
    """
    if discount_code is None:
        return ZERO

    if discount_code.kind == "percentage":
        discount = subtotal * (discount_code.value / HUNDRED)
        if discount_code.maximum_discount is not None and discount > discount_code.maximum_discount:
            discount = discount_code.maximum_discount
        return discount

    return min(discount_code.value, subtotal)


def compute_totals(
    line_items: Iterable[LineItem],
    additional_line_items: Iterable[AdditionalLineItem] = (),
    discount_code: DiscountCode | None = None,
    tax_rate: Decimal = ZERO,
) -> OrderTotals:
    """Compute subtotal, discount, tax and total for an order.

    Tax is charged on the discounted (taxable) amount. The total is
    floored at zero.

    Args:
        line_items: Catalogue line items.
        additional_line_items: Line items with precomputed totals.
        discount_code: Code to apply. Applicability is not checked here.
        tax_rate: Tax rate as a fraction, e.g. Decimal("0.08").

    Returns:
        OrderTotals: The computed totals.
    """
    subtotal = calculate_subtotal(line_items, additional_line_items)
    discount = calculate_discount(subtotal, discount_code)

    taxable_amount = subtotal - discount
    tax = taxable_amount * tax_rate

    total = subtotal - discount + tax
    if total < ZERO:
        logger.debug("Clamping negative total %s to zero", total)
        total = ZERO

    return OrderTotals(subtotal=subtotal, discount=discount, tax=tax, total=total)


def tax_rate_for_address(
    address: Address | None,
    rates: Mapping[str, Decimal],
    default: Decimal = ZERO,
) -> Decimal:
    """Look up the regional tax rate for an address.

    Addresses without a state, or in a region missing from ``rates``,
    get ``default``.
    """
    if address is None or not address.state:
        return default
    return rates.get(address.state.strip().upper(), default)


def calculate_tax(
    amount: Decimal,
    address: Address | None,
    rates: Mapping[str, Decimal],
    default: Decimal = ZERO,
) -> Decimal:
    """Tax due on an amount for the address's region."""
    return amount * tax_rate_for_address(address, rates, default)
