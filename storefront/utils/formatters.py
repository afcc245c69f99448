from typing import Dict, Tuple
from ..models.models import CartItem, GradeType, Product
from .constants import EMOJIS, CURRENCY_SYMBOL

def format_price(price: float) -> str:
    return f"{CURRENCY_SYMBOL}{price:.2f}"

def format_grade(grade: GradeType) -> str:
    return GradeType.parse(grade).value.upper()

def format_product_button(product: Product) -> str:
    """Format the label of a product button."""
    return f"{EMOJIS['PRODUCT']} {product.name} [{format_grade(product.grade)}] - {format_price(product.price)}"

def format_product_details(product: Product) -> str:
    """Format the detail card shown when a product is selected."""
    return (
        f"{EMOJIS['PRODUCT']} {product.name}\n\n"
        f"{EMOJIS['GRADE']} Grade: {format_grade(product.grade)}\n"
        f"{EMOJIS['MONEY']} Price: {format_price(product.price)}\n"
        f"{EMOJIS['LINK']} {product.link}"
    )

def format_cart_item_line(item: CartItem) -> str:
    subtotal = item.quantity * item.price
    return (
        f"• {item.name} [{format_grade(item.grade)}]: "
        f"{item.quantity} × {format_price(item.price)} = {format_price(subtotal)}"
    )

def format_cart_text(cart: Dict[str, CartItem]) -> Tuple[str, float]:
    """Format cart contents and calculate total."""
    if not cart:
        return f"{EMOJIS['CART']} Your cart is empty.", 0.0

    total = 0.0
    cart_lines = []

    for item in cart.values():
        total += item.quantity * item.price
        cart_lines.append(format_cart_item_line(item))

    cart_text = f"{EMOJIS['CART']} Cart:\n" + "\n".join(cart_lines)
    cart_text += f"\n\n{EMOJIS['MONEY']} Total: {format_price(total)}"

    return cart_text, total
