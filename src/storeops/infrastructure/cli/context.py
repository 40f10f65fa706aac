"""Per-invocation CLI state.

The root group stores an AppContext on the click context; the
Application (and with it the database connection) is only built when a
command first needs it, so ``--help`` never touches storage.
"""

from __future__ import annotations

from functools import cached_property

import click

from storeops.config import Settings
from storeops.domain.exceptions import DomainException, PersistenceError
from storeops.infrastructure.bootstrap import Application, build_application

# Errors a command reports to the user instead of crashing with a traceback.
CLI_ERRORS = (DomainException, PersistenceError)


class AppContext:

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @cached_property
    def app(self) -> Application:
        try:
            return build_application(self.settings)
        except PersistenceError as exc:
            raise click.ClickException(f"Cannot open store: {exc}")
