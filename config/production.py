import os

from .config import Config, supabase_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

SUPABASE_CONFIG = supabase_config()

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL
