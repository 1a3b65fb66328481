from django.db import models
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.core.serializers.json import DjangoJSONEncoder


class Activity(models.Model):
    """
    A single recorded activity.

    Subject and causer are generic references, so any model instance can
    be attached as the thing acted upon or as the actor.
    """
    log_name = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    description = models.TextField()
    subject_content_type = models.ForeignKey(
        ContentType, on_delete=models.CASCADE, null=True, blank=True, related_name='+'
    )
    subject_object_id = models.CharField(max_length=255, null=True, blank=True)
    subject = GenericForeignKey('subject_content_type', 'subject_object_id')
    causer_content_type = models.ForeignKey(
        ContentType, on_delete=models.CASCADE, null=True, blank=True, related_name='+'
    )
    causer_object_id = models.CharField(max_length=255, null=True, blank=True)
    causer = GenericForeignKey('causer_content_type', 'causer_object_id')
    properties = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'activity_log'
        ordering = ['-created_at']
        verbose_name_plural = 'Activities'

    def __str__(self):
        return f"[{self.log_name}] {self.description}"

    def get_extra_property(self, name, default=None):
        """
        Read a value from the properties, using dot notation for nested keys.

        Example:
            >>> activity.properties = {'attributes': {'name': 'new'}}
            >>> activity.get_extra_property('attributes.name')
            'new'
        """
        from activitylog.services.placeholders import data_get

        return data_get(self.properties or {}, name, default)


class ActivityLoggable(models.Model):
    """Links an activity to a secondary entity (a contragent)."""
    activity = models.ForeignKey(Activity, on_delete=models.CASCADE, related_name='loggables')
    loggable_content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE, related_name='+')
    loggable_object_id = models.CharField(max_length=255)
    loggable = GenericForeignKey('loggable_content_type', 'loggable_object_id')

    class Meta:
        db_table = 'activity_loggables'

    def __str__(self):
        return f"{self.loggable_content_type_id}:{self.loggable_object_id} -> activity {self.activity_id}"
