import os

os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("POSTGRES_USER", "storefront")
os.environ.setdefault("POSTGRES_PASSWORD", "storefront-test")
os.environ.setdefault("POSTGRES_DB", "storefront_test")
os.environ.setdefault("AUTH_SECRET_KEY", "storefront-test-secret-key")
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "100000")
os.environ.setdefault("STORE_API_RATE_LIMIT", "100000/minute")
os.environ.setdefault("NOTIFICATION_RATE_LIMIT", "100000/minute")
