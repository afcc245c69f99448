from storefront.models.models import Product
from storefront.utils.keyboards import (
    create_cart_keyboard, create_main_menu_keyboard,
    create_product_actions_keyboard, create_product_keyboard,
)


def _buttons(markup):
    return [button for row in markup.inline_keyboard for button in row]


PRODUCTS = [
    Product(1, "Widget", 9.99, "hg", "https://example/1"),
    Product(2, "Gadget", 5, "pg", "https://example/2"),
]


def test_product_keyboard_one_button_per_product():
    buttons = _buttons(create_product_keyboard(PRODUCTS))

    assert [b.callback_data for b in buttons] == ["product:1", "product:2"]
    assert "Widget" in buttons[0].text
    assert "[PG]" in buttons[1].text


def test_product_keyboard_cart_button():
    buttons = _buttons(create_product_keyboard(PRODUCTS, show_cart=True))
    assert buttons[-1].callback_data == "cart"


def test_product_actions_keyboard_links_to_product():
    buttons = _buttons(create_product_actions_keyboard(PRODUCTS[0]))

    assert buttons[0].url == "https://example/1"
    assert [b.callback_data for b in buttons[1:]] == ["add:1", "catalog"]


def test_cart_keyboard():
    assert [b.callback_data for b in _buttons(create_cart_keyboard())] == ["catalog", "clear_cart"]


def test_main_menu_keyboard():
    assert [b.callback_data for b in _buttons(create_main_menu_keyboard())] == ["catalog", "cart"]


def test_product_actions_keyboard_without_web_link():
    product = Product(3, "Kit", 1, "mg", "catalog/3")
    buttons = _buttons(create_product_actions_keyboard(product))

    assert all(b.url is None for b in buttons)
    assert [b.callback_data for b in buttons] == ["add:3", "catalog"]
