"""Zone editor API application."""

import logging
import sys
from typing import Optional

from fastapi import FastAPI

from zone_editor.config import DATABASE_URL, LOG_LEVEL
from zone_editor.database import init_db, make_engine, make_session_factory
from zone_editor.routes import templates
from zone_editor.services.editor_context import EditorContext, parse_editor_args
from zone_editor.services.settings_store import SettingsStore
from zone_editor.services.template_set import IntSettingsStore, TemplateSet

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_store(context: EditorContext, url: str = DATABASE_URL) -> SettingsStore:
    """Database-backed settings store for the context's monitor."""
    engine = make_engine(url)
    init_db(engine)
    logger.info("Settings store ready at %s (%s)", url, context.settings_path)
    return SettingsStore(make_session_factory(engine), context.settings_path)


def create_app(context: Optional[EditorContext] = None,
               store: Optional[IntSettingsStore] = None) -> FastAPI:
    """Build the API around one template set."""
    context = context or EditorContext()
    if store is None:
        store = create_store(context)

    app = FastAPI(title="Zone Editor", version="0.1.0")
    app.state.template_set = TemplateSet(context, store)
    app.include_router(templates.router)
    return app


def run() -> None:
    """Console entry point: serve the API for the monitor given on argv."""
    import uvicorn

    configure_logging()
    app = create_app(parse_editor_args(sys.argv))
    uvicorn.run(app, host="127.0.0.1", port=8000)
