"""Registry of models whose changes feed the email trigger engine.

Each registered model is exposed to triggers as a named collection. Saving or
deleting a row emits a document-change event carrying a JSON-safe snapshot of
the row.

Usage:
    @email_trigger_source("registrations", extra_fields=["first_name"])
    class Registration(models.Model):
        ...

    # Models from other apps (e.g. auth.User) are registered in AppConfig.ready()
    EmailTriggerSourceRegistry.register(User, "users", exclude=["password"])
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder
from django.db.models.signals import post_delete, post_save

DEFAULT_EXCLUDED_FIELDS = frozenset({"password"})


@dataclass(frozen=True)
class TriggerSource:
    collection: str
    exclude: frozenset[str] = field(default_factory=frozenset)
    extra_fields: tuple[str, ...] = ()


class EmailTriggerSourceRegistry:
    _registry: dict = {}  # {model_class: TriggerSource}

    @classmethod
    def register(
        cls,
        model_class,
        collection: str,
        exclude: Iterable[str] = (),
        extra_fields: Iterable[str] = (),
    ):
        """Register a model as a collection and connect its change signals."""
        from .signals import handle_document_deleted, handle_document_saved

        for registered_model, source in cls._registry.items():
            if source.collection == collection and registered_model is not model_class:
                raise ValueError(
                    f"Collection '{collection}' is already bound to {registered_model._meta.label}"
                )

        cls._registry[model_class] = TriggerSource(
            collection=collection,
            exclude=DEFAULT_EXCLUDED_FIELDS | frozenset(exclude),
            extra_fields=tuple(extra_fields),
        )
        dispatch_uid = f"emailsystem:{model_class._meta.label_lower}"
        post_save.connect(handle_document_saved, sender=model_class, weak=False, dispatch_uid=dispatch_uid)
        post_delete.connect(handle_document_deleted, sender=model_class, weak=False, dispatch_uid=dispatch_uid)
        return model_class

    @classmethod
    def unregister(cls, model_class) -> None:
        if cls._registry.pop(model_class, None) is None:
            return
        dispatch_uid = f"emailsystem:{model_class._meta.label_lower}"
        post_save.disconnect(sender=model_class, dispatch_uid=dispatch_uid)
        post_delete.disconnect(sender=model_class, dispatch_uid=dispatch_uid)

    @classmethod
    def is_registered(cls, model_class) -> bool:
        return model_class in cls._registry

    @classmethod
    def get_source(cls, model_class) -> TriggerSource | None:
        return cls._registry.get(model_class)

    @classmethod
    def get_collection(cls, model_class) -> str | None:
        source = cls._registry.get(model_class)
        return source.collection if source else None

    @classmethod
    def get_model(cls, collection: str):
        for model_class, source in cls._registry.items():
            if source.collection == collection:
                return model_class
        return None

    @classmethod
    def get_all_collections(cls) -> list[str]:
        return sorted(source.collection for source in cls._registry.values())


def email_trigger_source(collection: str, exclude: Iterable[str] = (), extra_fields: Iterable[str] = ()):
    """Class decorator registering a model as an email trigger collection."""

    def decorator(model_class):
        return EmailTriggerSourceRegistry.register(
            model_class, collection, exclude=exclude, extra_fields=extra_fields
        )

    return decorator


def serialize_document(instance) -> dict[str, Any]:
    """Snapshot a model instance as a flat, JSON-safe dict.

    Concrete fields are keyed by attribute name (``user_id`` for foreign keys).
    Decimals and datetimes become strings, matching what a JSON document store
    would hold.
    """
    source = EmailTriggerSourceRegistry.get_source(type(instance))
    exclude = source.exclude if source else DEFAULT_EXCLUDED_FIELDS
    extra_fields = source.extra_fields if source else ()

    data: dict[str, Any] = {}
    for model_field in instance._meta.concrete_fields:
        if model_field.name in exclude or model_field.attname in exclude:
            continue
        data[model_field.attname] = model_field.value_from_object(instance)
    for name in extra_fields:
        data[name] = getattr(instance, name, None)

    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))
