import uuid

from django.db import models


class BaseModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["created_at"]


class AutoIdMixin(models.Model):
    """Mixin for models keyed by a human-readable string id.

    Callers may supply the id (e.g. ``"welcome"``); when they don't, ``save``
    fills in ``<ID_PREFIX>-<random hex>``.

    Example:
        class EmailTrigger(AutoIdMixin, BaseModel):
            ID_PREFIX = "trigger"
            id = models.CharField(primary_key=True, max_length=100, blank=True)
    """

    ID_PREFIX: str = "obj"

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if self._state.adding and not self.pk:
            self.pk = f"{self.ID_PREFIX}-{uuid.uuid4().hex[:12]}"
        super().save(*args, **kwargs)
