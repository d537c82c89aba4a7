import os

from .config import Config, supabase_config

SECRET_KEY = Config.SECRET_KEY

SUPABASE_CONFIG = supabase_config()

DEBUG = bool(int(os.getenv("DEBUG", "1")))
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()
