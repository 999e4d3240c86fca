"""Keep the upload service in sync with hotel and room pictures.

When a picture is replaced, or its hotel/room is deleted (rooms go with
their hotel), the old file is removed from storage after the database
change commits.
"""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore
from django.db.models.signals import post_delete, post_save, pre_save  # type: ignore
from django.dispatch import receiver  # type: ignore

from apps.core.storage import StorageError, delete_file_by_url

from .models import Hotel, Room

logger = logging.getLogger(__name__)


def _delete_image_later(url: str) -> None:
    def _delete() -> None:
        try:
            delete_file_by_url(url)
        except StorageError:
            # the database change already happened; the file is orphaned
            logger.exception("Could not delete image %s from storage", url)

    if url:
        transaction.on_commit(_delete)


@receiver(pre_save, sender=Hotel)
@receiver(pre_save, sender=Room)
def remember_previous_image(sender, instance, **kwargs):
    if not instance.pk:
        instance._previous_image = None
        return
    instance._previous_image = (
        sender.objects.filter(pk=instance.pk).values_list("image", flat=True).first()
    )


@receiver(post_save, sender=Hotel)
@receiver(post_save, sender=Room)
def delete_replaced_image(sender, instance, created, **kwargs):
    previous_image = getattr(instance, "_previous_image", None)
    if previous_image and previous_image != instance.image:
        _delete_image_later(previous_image)
    if hasattr(instance, "_previous_image"):
        delattr(instance, "_previous_image")


@receiver(post_delete, sender=Hotel)
@receiver(post_delete, sender=Room)
def delete_image_of_deleted_record(sender, instance, **kwargs):
    _delete_image_later(instance.image)
