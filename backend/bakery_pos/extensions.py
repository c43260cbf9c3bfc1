# Overview: Flask extension instances for the POS store table and its migrations.

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate

db = SQLAlchemy()

# The default store is a SQLite file; ALTER TABLE there needs batch mode
migrate = Migrate(render_as_batch=True)
