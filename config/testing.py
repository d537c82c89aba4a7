SECRET_KEY = "test-secret"

SUPABASE_CONFIG = {
    "url": "http://localhost:54321",
    "key": "test-anon-key",
    "photo_bucket": "photos",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
