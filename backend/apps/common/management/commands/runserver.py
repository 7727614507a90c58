from django.conf import settings
from django.core.management.commands.runserver import Command as RunserverCommand

from apps.common import get_logger

logger = get_logger(__name__).bind(component="common", layer="command")


class Command(RunserverCommand):
    """Django's development server, listening on settings.PORT unless an address is given."""

    default_port = str(getattr(settings, "PORT", RunserverCommand.default_port))

    def inner_run(self, *args, **options):
        logger.info("Server starting", addr=self.addr, port=self.port)
        return super().inner_run(*args, **options)
