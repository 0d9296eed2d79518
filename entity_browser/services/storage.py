"""
Storage for entity reference field items.

Items are keyed by owner object and field name and kept in delta order.
"""
import logging
from typing import Iterable

from django.contrib.contenttypes.models import ContentType
from django.db import transaction

from entity_browser.models import ReferenceItem
from entity_browser.services.reconciler import ReferenceValue

logger = logging.getLogger(__name__)


def _owner_filter(owner, field_name: str) -> dict:
    return {
        'owner_type': ContentType.objects.get_for_model(owner),
        'owner_id': str(owner.pk),
        'field_name': field_name,
    }


def load_reference_set(owner, field_name: str) -> list[ReferenceValue]:
    """
    Load the references stored for ``owner.<field_name>``.

    Returns:
        ReferenceValues in stored order, weight set to the stored delta
    """
    if owner is None or owner.pk is None:
        return []
    items = ReferenceItem.objects.filter(**_owner_filter(owner, field_name)).order_by('delta')
    return [
        ReferenceValue(target_id=item.target_id, weight=item.delta, description=item.description)
        for item in items
    ]


@transaction.atomic
def save_reference_set(owner, field_name: str, records: Iterable) -> int:
    """
    Replace the stored references of ``owner.<field_name>``.

    Args:
        owner: Saved model instance owning the field
        field_name: Name of the entity reference field
        records: ``{target_id}`` / ``{target_id, weight, description}``
            records or ReferenceValues, in the order to store

    Returns:
        Number of items stored
    """
    lookup = _owner_filter(owner, field_name)
    ReferenceItem.objects.filter(**lookup).delete()

    values = [v for v in (ReferenceValue.coerce(r) for r in records) if v.target_id]
    ReferenceItem.objects.bulk_create([
        ReferenceItem(delta=delta, target_id=value.target_id, description=value.description, **lookup)
        for delta, value in enumerate(values)
    ])
    logger.info(f"Saved {len(values)} references for {lookup['owner_type'].model} {owner.pk}.{field_name}")
    return len(values)


def delete_reference_set(owner, field_name: str) -> int:
    deleted, _ = ReferenceItem.objects.filter(**_owner_filter(owner, field_name)).delete()
    return deleted
