from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _


class Priority(models.TextChoices):
    HIGH = 'High', _('High')
    MEDIUM = 'Medium', _('Medium')
    LOW = 'Low', _('Low')


class TodoQuerySet(models.QuerySet):

    def owned_by(self, owner):
        """Every read or write on behalf of a user starts here."""
        return self.filter(user=owner)

    def open(self):
        return self.filter(completed=False)


class Todo(models.Model):
    """
    A short text task belonging to one user.

    ``priority`` is unset until the AI classifier assigns one; it is the only
    field the prioritization pipeline writes.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='todos',
        verbose_name=_("user")
    )

    task = models.TextField(verbose_name=_("task"))
    completed = models.BooleanField(default=False, verbose_name=_("completed"))
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        null=True, blank=True,
        verbose_name=_("priority"),
        help_text=_("AI-assigned priority tier.")
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    objects = TodoQuerySet.as_manager()

    class Meta:
        verbose_name = _("Todo")
        verbose_name_plural = _("Todos")
        ordering = ['id']

    def __str__(self):
        return f"Todo {self.pk} for {self.user}: {self.task}"
