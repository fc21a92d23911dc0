import os

try:
    from backend.impostor.logging import setup_logging
    from backend.impostor.server import create_app
except ImportError:  # pragma: no cover
    from impostor.logging import setup_logging
    from impostor.server import create_app

setup_logging(log_dir=os.environ.get("LOG_DIR") or None)
app, socketio = create_app()
