import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "school-admin-dev-secret"

    # Hosted backend (Supabase project URL + anon key)
    SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
    PHOTO_BUCKET = os.environ.get("PHOTO_BUCKET", "photos")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def supabase_config() -> dict:
    return {
        "url": Config.SUPABASE_URL,
        "key": Config.SUPABASE_ANON_KEY,
        "photo_bucket": Config.PHOTO_BUCKET,
    }
