import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class TodosConfig(AppConfig):
    """
    Builds the external-service clients once per process.

    Views read ``classifier`` and ``mail_dispatcher`` from the app config and
    pass them into the pipelines; tests swap them for fakes.
    """
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'todos'

    classifier = None
    mail_dispatcher = None

    def ready(self):
        from .digest.mailer import MailDispatcher
        from .prioritization.classifier import PriorityClassifier

        self.classifier = PriorityClassifier()
        self.mail_dispatcher = MailDispatcher()
        logger.debug("Todo service clients initialised")
