"""Price and stock recomputation for bulk catalog updates.

Pure functions: directive validation runs once per request, the compute
functions run once per product. Arithmetic is exact Decimal arithmetic;
no rounding is applied to computed prices.
"""

from decimal import Decimal

from mercato.domain.value_objects import (
    PriceDirective,
    PriceUpdateType,
    StockDirective,
    StockUpdateType,
)

_HUNDRED = Decimal(100)

PRICE_NOT_POSITIVE = "Resulting price would be zero or negative."
STOCK_NEGATIVE = "Resulting stock would be negative."


# ============================================================================
# Directive Validation
# ============================================================================


def validate_price_directive(directive: PriceDirective, errors: list[str]) -> None:
    """Append violations for a malformed price directive."""
    finite = directive.value.is_finite()
    if directive.update_type == PriceUpdateType.FIXED:
        if not finite or directive.value <= 0:
            errors.append("Fixed price must be greater than 0.")
    elif directive.is_percentage:
        if not finite or directive.value <= 0:
            errors.append("Percentage must be greater than 0.")
        elif (
            directive.update_type == PriceUpdateType.PERCENTAGE_DECREASE
            and directive.value > _HUNDRED
        ):
            errors.append("Percentage decrease cannot exceed 100%.")
    elif not finite or directive.value <= 0:
        errors.append("Amount must be greater than 0.")


def validate_stock_directive(directive: StockDirective, errors: list[str]) -> None:
    """Append violations for a malformed stock directive."""
    if directive.update_type == StockUpdateType.FIXED:
        if directive.value < 0:
            errors.append("Fixed stock cannot be negative.")
    elif directive.value <= 0:
        errors.append("Stock adjustment amount must be greater than 0.")


def validate_directives(
    price_directive: PriceDirective | None,
    stock_directive: StockDirective | None,
) -> list[str]:
    """Validate the directive pair of a bulk request.

    Returns:
        Violations; empty when at least one well-formed directive is given.
    """
    errors: list[str] = []
    if price_directive is None and stock_directive is None:
        errors.append("At least one update (price or stock) must be specified.")
    if price_directive is not None:
        validate_price_directive(price_directive, errors)
    if stock_directive is not None:
        validate_stock_directive(stock_directive, errors)
    return errors


# ============================================================================
# Computation
# ============================================================================


def compute_new_price(current_price: Decimal, directive: PriceDirective) -> Decimal:
    """Compute the price a directive produces for one product.

    Args:
        current_price: Product's current price.
        directive: Validated price directive.

    Returns:
        New price; may be zero or negative, see is_valid_price.
    """
    value = directive.value
    if directive.update_type == PriceUpdateType.FIXED:
        return value
    if directive.update_type == PriceUpdateType.PERCENTAGE_INCREASE:
        return current_price * (1 + value / _HUNDRED)
    if directive.update_type == PriceUpdateType.PERCENTAGE_DECREASE:
        return current_price * (1 - value / _HUNDRED)
    if directive.update_type == PriceUpdateType.AMOUNT_INCREASE:
        return current_price + value
    if directive.update_type == PriceUpdateType.AMOUNT_DECREASE:
        return current_price - value
    raise ValueError(f"Unsupported price update type: {directive.update_type}")


def compute_new_stock(current_stock: int, directive: StockDirective) -> int:
    """Compute the stock level a directive produces for one product."""
    if directive.update_type == StockUpdateType.FIXED:
        return directive.value
    if directive.update_type == StockUpdateType.INCREASE:
        return current_stock + directive.value
    if directive.update_type == StockUpdateType.DECREASE:
        return current_stock - directive.value
    raise ValueError(f"Unsupported stock update type: {directive.update_type}")


def is_valid_price(price: Decimal) -> bool:
    return price.is_finite() and price > 0


def is_valid_stock(stock: int) -> bool:
    return stock >= 0
