from urllib.parse import urlparse
from typing import List
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from ..models.models import Product
from .constants import EMOJIS
from .formatters import format_product_button

def create_product_keyboard(products: List[Product], show_cart: bool = False) -> InlineKeyboardMarkup:
    """Create a keyboard with product buttons and optional cart button."""
    keyboard = [
        [InlineKeyboardButton(
            format_product_button(product),
            callback_data=f'product:{product.id}'
        )]
        for product in products
    ]

    if show_cart:
        keyboard.append([
            InlineKeyboardButton(f"{EMOJIS['CART']} View Cart", callback_data='cart')
        ])

    return InlineKeyboardMarkup(keyboard)

def create_product_actions_keyboard(product: Product) -> InlineKeyboardMarkup:
    """Create the keyboard shown under a product detail card.

    Telegram only accepts absolute web links on URL buttons; any other link
    stays in the card text.
    """
    keyboard = []
    if urlparse(product.link).scheme in ('http', 'https'):
        keyboard.append([InlineKeyboardButton(f"{EMOJIS['LINK']} Open Product Page", url=product.link)])
    keyboard += [
        [InlineKeyboardButton(f"{EMOJIS['PLUS']} Add to Cart", callback_data=f'add:{product.id}')],
        [InlineKeyboardButton(f"{EMOJIS['BACK']} Back to Catalog", callback_data='catalog')]
    ]
    return InlineKeyboardMarkup(keyboard)

def create_cart_keyboard() -> InlineKeyboardMarkup:
    keyboard = [
        [InlineKeyboardButton(f"{EMOJIS['BACK']} Back to Catalog", callback_data='catalog')],
        [InlineKeyboardButton(f"{EMOJIS['TRASH']} Clear Cart", callback_data='clear_cart')]
    ]
    return InlineKeyboardMarkup(keyboard)

def create_main_menu_keyboard() -> InlineKeyboardMarkup:
    """Create the main menu keyboard."""
    keyboard = [
        [InlineKeyboardButton(f"{EMOJIS['SHOPPING']} Browse Catalog", callback_data='catalog')],
        [InlineKeyboardButton(f"{EMOJIS['CART']} View Cart", callback_data='cart')]
    ]
    return InlineKeyboardMarkup(keyboard)
