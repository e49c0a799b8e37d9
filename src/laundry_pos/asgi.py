from __future__ import annotations

from laundry_pos.adapters.inbound.web.fastapi_app import create_app
from laundry_pos.bootstrap import build_usecases
from laundry_pos.config import load_settings
from laundry_pos.logging_config import configure_logging

settings = load_settings()
configure_logging(settings)
usecases = build_usecases(settings)
app = create_app(usecases)
