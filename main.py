import os

import uvicorn
from dotenv import load_dotenv

from core.domain.errors import ConfigurationError
from infrastructure.config import configure_logging, load_settings

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def run() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        raise SystemExit(f"Invalid configuration: {e}")
    configure_logging(settings)

    host = os.getenv("HOST", "127.0.0.1")
    port_str = os.getenv("PORT", "8000")
    port = int(port_str)
    reload = _as_bool(os.getenv("RELOAD", "true"))
    db_scheme = settings.database_url.split(":", 1)[0]

    if reload:
        # The reloader imports the app in a fresh process, which loads its own settings.
        target = "backend_fastapi.main:app"
    else:
        from backend_fastapi.main import app

        app.state.settings = settings
        target = app

    print(f"Starting server at http://{host}:{port} (Reload: {reload}, DB: {db_scheme})")

    uvicorn.run(
        target,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    run()
