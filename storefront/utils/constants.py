import os
from dotenv import load_dotenv

load_dotenv()

# Conversation states
BROWSING, QUANTITY = range(2)

# Emojis for UI elements
EMOJIS = {
    'CART': '🛒',
    'MONEY': '💰',
    'PRODUCT': '💠',
    'GRADE': '🏷️',
    'LINK': '🔗',
    'WARNING': '⚠️',
    'ERROR': '❌',
    'SHOPPING': '🛍️',
    'PACKAGE': '📦',
    'ARROW': '🔽',
    'BACK': '⬅️',
    'WAVE': '👋',
    'PLUS': '➕',
    'TRASH': '🗑️'
}

CURRENCY_SYMBOL = os.getenv('CURRENCY_SYMBOL', '₴')

# Initialize authorized users from environment variables
AUTHORIZED_USERS_IDS = set()
AUTHORIZED_USERS_USERNAMES = set()

for user in os.getenv('AUTHORIZED_USERS', '').split(','):
    user = user.strip()
    if user.startswith('@'):
        AUTHORIZED_USERS_USERNAMES.add(user.lower())
    elif user.isdigit():
        AUTHORIZED_USERS_IDS.add(int(user))
