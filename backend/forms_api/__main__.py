"""Entry point for ``python -m forms_api``."""

from forms_api.main import run

run()
