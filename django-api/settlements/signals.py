"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from settlements.models import Event, Participant
from settlements.stores.django_store import EVENT_LIST_KEY, event_key, participants_key


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    cache.delete_many([EVENT_LIST_KEY, event_key(instance.pk), participants_key(instance.pk)])


@receiver([post_save, post_delete], sender=Participant)
def invalidate_participant_cache(sender, instance, **kwargs):
    """Invalidate the roster cache when a participant is saved or deleted."""
    cache.delete(participants_key(instance.event_id))
