import os
from dotenv import load_dotenv

load_dotenv()


def _split_origins(value):
    return [o.strip() for o in (value or '').split(',') if o.strip()]


def _optional_float(value):
    try:
        return float(value) if value else None
    except ValueError:
        return None


class Config:
    SHOPIFY_SHOP = os.getenv('SHOPIFY_SHOP', '')
    SHOPIFY_ADMIN_TOKEN = os.getenv('SHOPIFY_ADMIN_TOKEN', '')
    API_VERSION = os.getenv('API_VERSION', '')
    SHOPIFY_TIMEOUT = _optional_float(os.getenv('SHOPIFY_TIMEOUT'))

    CORS_ORIGINS = _split_origins(
        os.getenv('CORS_ORIGINS', 'https://fraegra.myshopify.com,https://fraegra.com')
    )

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
