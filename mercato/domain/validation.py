"""Product field validation rules.

Stateless checks that each append zero or more human-readable violations
to a shared list, so callers collect every problem in one pass instead of
stopping at the first.
"""

from dataclasses import dataclass
from decimal import Decimal

from mercato.domain.value_objects import ProductDetails


@dataclass(frozen=True)
class ProductLimits:
    """Configured bounds for product fields.

    Attributes:
        title_min_length: Minimum title length.
        title_max_length: Maximum title length.
        description_max_length: Maximum description length.
        category_min_length: Minimum category length.
        category_max_length: Maximum category length.
        weight_max_kg: Maximum shipping weight in kilograms.
        dimension_max_cm: Maximum length, width, or height in centimeters.
        shipping_methods_max_length: Maximum serialized shipping methods length.
        images_max_length: Maximum serialized images length.
    """

    title_min_length: int = 2
    title_max_length: int = 200
    description_max_length: int = 2000
    category_min_length: int = 2
    category_max_length: int = 100
    weight_max_kg: Decimal = Decimal("1000")
    dimension_max_cm: Decimal = Decimal("500")
    shipping_methods_max_length: int = 500
    images_max_length: int = 4000


DEFAULT_LIMITS = ProductLimits()


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_title(title: str | None, errors: list[str], limits: ProductLimits = DEFAULT_LIMITS) -> None:
    if _is_blank(title):
        errors.append("Title is required.")
    elif not limits.title_min_length <= len(title) <= limits.title_max_length:
        errors.append(
            f"Title must be between {limits.title_min_length} "
            f"and {limits.title_max_length} characters."
        )


def validate_price(price: Decimal | None, errors: list[str]) -> None:
    if price is None or not price.is_finite() or price <= 0:
        errors.append("Price must be greater than 0.")


def validate_stock(stock: int | None, errors: list[str]) -> None:
    if stock is None or stock < 0:
        errors.append("Stock cannot be negative.")


def validate_category(category: str | None, errors: list[str], limits: ProductLimits = DEFAULT_LIMITS) -> None:
    if _is_blank(category):
        errors.append("Category is required.")
    elif not limits.category_min_length <= len(category) <= limits.category_max_length:
        errors.append(
            f"Category must be between {limits.category_min_length} "
            f"and {limits.category_max_length} characters."
        )


def validate_description(
    description: str | None, errors: list[str], limits: ProductLimits = DEFAULT_LIMITS
) -> None:
    if description is not None and len(description) > limits.description_max_length:
        errors.append(f"Description must be at most {limits.description_max_length} characters.")


def _validate_measure(
    name: str, value: Decimal | None, maximum: Decimal, unit: str, errors: list[str]
) -> None:
    if value is None:
        return
    if value.is_nan() or value > maximum:
        errors.append(f"{name} must be at most {maximum} {unit}.")
    elif value < 0:
        errors.append(f"{name} cannot be negative.")


def validate_shipping(
    weight: Decimal | None,
    length: Decimal | None,
    width: Decimal | None,
    height: Decimal | None,
    shipping_methods: str | None,
    errors: list[str],
    limits: ProductLimits = DEFAULT_LIMITS,
) -> None:
    """Validate optional physical attributes and the shipping methods string."""
    _validate_measure("Weight", weight, limits.weight_max_kg, "kg", errors)
    _validate_measure("Length", length, limits.dimension_max_cm, "cm", errors)
    _validate_measure("Width", width, limits.dimension_max_cm, "cm", errors)
    _validate_measure("Height", height, limits.dimension_max_cm, "cm", errors)

    if shipping_methods is not None and len(shipping_methods) > limits.shipping_methods_max_length:
        errors.append(
            f"Shipping methods must be at most {limits.shipping_methods_max_length} characters."
        )


def validate_images(images: str | None, errors: list[str], limits: ProductLimits = DEFAULT_LIMITS) -> None:
    if images is not None and len(images) > limits.images_max_length:
        errors.append(f"Images must be at most {limits.images_max_length} characters.")


def validate_required_id(value: object | None, label: str, errors: list[str]) -> None:
    """Record a violation when a required identifier is missing or blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        errors.append(f"{label} is required.")


def validate_product_fields(
    *,
    title: str | None,
    description: str | None,
    price: Decimal | None,
    stock: int | None,
    category: str | None,
    weight: Decimal | None = None,
    length: Decimal | None = None,
    width: Decimal | None = None,
    height: Decimal | None = None,
    shipping_methods: str | None = None,
    images: str | None = None,
    limits: ProductLimits = DEFAULT_LIMITS,
) -> list[str]:
    """Run every catalog field rule and return all violations.

    Returns:
        Violations in rule order; empty when the fields are valid.
    """
    errors: list[str] = []
    validate_title(title, errors, limits)
    validate_price(price, errors)
    validate_stock(stock, errors)
    validate_category(category, errors, limits)
    validate_description(description, errors, limits)
    validate_shipping(weight, length, width, height, shipping_methods, errors, limits)
    validate_images(images, errors, limits)
    return errors


def validate_details(details: ProductDetails, limits: ProductLimits = DEFAULT_LIMITS) -> list[str]:
    """Run every catalog field rule against a ProductDetails value."""
    return validate_product_fields(
        title=details.title,
        description=details.description,
        price=details.price,
        stock=details.stock,
        category=details.category,
        weight=details.weight,
        length=details.length,
        width=details.width,
        height=details.height,
        shipping_methods=details.shipping_methods,
        images=details.images,
        limits=limits,
    )
