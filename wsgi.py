# wsgi.py
import atexit
import os

from staff_directory import create_app
from staff_directory.database import db

# --- Only create the app once ---
app = create_app()


@atexit.register
def _dispose_engine():
    with app.app_context():
        db.engine.dispose()


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    app.run(host="0.0.0.0", port=port, debug=debug)
