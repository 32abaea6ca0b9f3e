# prayertools/extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# SQLAlchemy extension
db = SQLAlchemy()

# Migrate extension (database migrations)
migrate = Migrate()

# Limiter extension. The default limit comes from RATELIMIT_DEFAULT in the config.
limiter = Limiter(key_func=get_remote_address)
