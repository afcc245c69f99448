import os
import logging
from dotenv import load_dotenv
from telegram import Update
from telegram.ext import (
    Application, CommandHandler, CallbackQueryHandler, MessageHandler,
    filters, ConversationHandler
)
from storefront.database.database import Catalog
from storefront.utils.constants import BROWSING, QUANTITY
from storefront.handlers.catalog_handlers import (
    start, show_catalog, show_product, ask_quantity, handle_quantity,
    show_cart, clear_cart, cancel
)

# Load environment variables
load_dotenv()

# Enable logging
logging.basicConfig(format='%(asctime)s - %(name)s - %(levelname)s - %(message)s', level=logging.INFO)
logger = logging.getLogger(__name__)

def build_application(token: str, catalog: Catalog) -> Application:
    application = Application.builder().token(token).build()
    application.bot_data['catalog'] = catalog

    application.add_handler(CommandHandler("start", start))

    conv_handler = ConversationHandler(
        entry_points=[
            CommandHandler('catalog', show_catalog),
            CommandHandler('cart', show_cart),
            CallbackQueryHandler(show_catalog, pattern='^catalog$'),
            CallbackQueryHandler(show_cart, pattern='^cart$')
        ],
        states={
            BROWSING: [
                CallbackQueryHandler(show_catalog, pattern='^catalog$'),
                CallbackQueryHandler(show_product, pattern='^product:'),
                CallbackQueryHandler(ask_quantity, pattern='^add:'),
                CallbackQueryHandler(show_cart, pattern='^cart$'),
                CallbackQueryHandler(clear_cart, pattern='^clear_cart$')
            ],
            QUANTITY: [MessageHandler(filters.TEXT & ~filters.COMMAND, handle_quantity)]
        },
        fallbacks=[
            CommandHandler('cancel', cancel),
            CommandHandler('start', start)
        ],
        allow_reentry=True
    )
    application.add_handler(conv_handler)

    return application

def main():
    token = os.getenv('BOT_TOKEN')
    if not token:
        raise ValueError("BOT_TOKEN environment variable is not set")

    application = build_application(token, Catalog())

    logger.info("Starting bot...")
    application.run_polling(allowed_updates=Update.ALL_TYPES)

if __name__ == '__main__':
    main()
