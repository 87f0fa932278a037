# meditime/extensions.py
from flask_sqlalchemy import SQLAlchemy

# Bound to the app in create_app(); never used before init_app.
db = SQLAlchemy()
