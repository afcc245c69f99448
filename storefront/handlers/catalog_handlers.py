import logging
from typing import Optional
from psycopg import Error
from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler
from ..utils.constants import BROWSING, QUANTITY, EMOJIS
from ..utils.keyboards import (
    create_product_keyboard, create_product_actions_keyboard,
    create_cart_keyboard, create_main_menu_keyboard
)
from ..utils.formatters import format_cart_text, format_product_details
from ..models.models import CartItem, Product, MAX_QUANTITY
from .auth_handlers import check_auth

logger = logging.getLogger(__name__)

async def _message_for(update: Update):
    # Handle both direct command and callback query
    if update.callback_query:
        await update.callback_query.answer()
        return update.callback_query.message
    return update.message

def _find_product(context: ContextTypes.DEFAULT_TYPE, product_id: str) -> Optional[Product]:
    products = context.user_data.get('products', {})
    if product_id in products:
        return products[product_id]
    if not product_id.isdigit():
        return None
    product = context.bot_data['catalog'].get_product(int(product_id))
    if product is not None:
        products[product_id] = product
        context.user_data['products'] = products
    return product

async def start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not await check_auth(update):
        return ConversationHandler.END

    # Set up menu commands
    commands = [
        ('start', 'Start the bot'),
        ('catalog', 'Browse products'),
        ('cart', 'Show your cart')
    ]
    await context.bot.set_my_commands(commands)

    await update.message.reply_text(
        f"{EMOJIS['WAVE']} Welcome to the store!\n"
        f"{EMOJIS['ARROW']} What would you like to do?",
        reply_markup=create_main_menu_keyboard()
    )
    return ConversationHandler.END

async def show_catalog(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not await check_auth(update):
        return ConversationHandler.END

    message = await _message_for(update)

    try:
        products = context.bot_data['catalog'].get_products()
    except Error as e:
        logger.error(f"Database error: {e}")
        await message.reply_text(f"{EMOJIS['ERROR']} Sorry, the catalog is unavailable. Please try again.")
        return ConversationHandler.END

    if not products:
        await message.reply_text(f"{EMOJIS['ERROR']} No products available.")
        return ConversationHandler.END

    context.user_data['products'] = {str(p.id): p for p in products}
    cart = context.user_data.setdefault('cart', {})

    await message.reply_text(
        f"{EMOJIS['SHOPPING']} Select a product:",
        reply_markup=create_product_keyboard(products, show_cart=bool(cart))
    )
    return BROWSING

async def show_product(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()

    product_id = query.data.split(':', 1)[1]
    try:
        product = _find_product(context, product_id)
    except Error as e:
        logger.error(f"Database error: {e}")
        await query.message.reply_text(f"{EMOJIS['ERROR']} Sorry, the catalog is unavailable. Please try again.")
        return ConversationHandler.END

    if product is None:
        await query.message.reply_text(f"{EMOJIS['WARNING']} This product is no longer available.")
        return BROWSING

    await query.message.reply_text(
        format_product_details(product),
        reply_markup=create_product_actions_keyboard(product)
    )
    return BROWSING

async def ask_quantity(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()

    product_id = query.data.split(':', 1)[1]
    product = context.user_data.get('products', {}).get(product_id)
    if product is None:
        await query.message.reply_text(f"{EMOJIS['WARNING']} Please select a product from the catalog first.")
        return BROWSING

    context.user_data['current_product'] = product_id
    await query.message.reply_text(f"{EMOJIS['PACKAGE']} Enter quantity for {product.name}:")
    return QUANTITY

async def handle_quantity(update: Update, context: ContextTypes.DEFAULT_TYPE):
    products = context.user_data.get('products', {})
    product_id = context.user_data.get('current_product')
    if product_id not in products:
        context.user_data.pop('current_product', None)
        await update.message.reply_text(f"{EMOJIS['WARNING']} Please select a product first.")
        return BROWSING

    try:
        item = CartItem.from_product(products[product_id], int(update.message.text.strip()))
    except ValueError:
        await update.message.reply_text(
            f"{EMOJIS['ERROR']} Please enter a whole number from 1 to {MAX_QUANTITY}!"
        )
        return QUANTITY

    cart = context.user_data.get('cart', {})
    # same product again replaces the quantity
    updated_cart = {**cart, product_id: item}
    cart_text, _ = format_cart_text(updated_cart)

    context.user_data['cart'] = updated_cart
    context.user_data.pop('current_product', None)
    logger.info(f"Cart of user {update.effective_user.id}: {product_id} x{item.quantity}")

    await update.message.reply_text(
        cart_text,
        reply_markup=create_product_keyboard(list(products.values()), show_cart=True)
    )
    return BROWSING

async def show_cart(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not await check_auth(update):
        return ConversationHandler.END

    message = await _message_for(update)
    cart_text, _ = format_cart_text(context.user_data.get('cart', {}))
    await message.reply_text(cart_text, reply_markup=create_cart_keyboard())
    return BROWSING

async def clear_cart(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    await query.answer()

    context.user_data['cart'] = {}
    await query.message.reply_text(
        f"{EMOJIS['TRASH']} Cart cleared.",
        reply_markup=create_main_menu_keyboard()
    )
    return BROWSING

async def cancel(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not await check_auth(update):
        return ConversationHandler.END

    context.user_data.clear()
    await update.message.reply_text(f"{EMOJIS['ERROR']} Operation cancelled.")
    return ConversationHandler.END
