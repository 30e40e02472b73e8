"""ASGI entrypoint for the journal gallery API."""

from journal_gallery.api.app import create_app
from journal_gallery.containers import build_container

app = create_app(build_container())
