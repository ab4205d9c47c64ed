from django.contrib import admin
from django.db import models
from django.utils.html import format_html

from .models import DrawPair
from .models import Event
from .models import Participant


class ParticipantInline(admin.TabularInline):
    model = Participant
    extra = 1
    fields = ['name', 'whatsapp_number', 'confirmed', 'confirmed_at', 'gift_suggestion']
    readonly_fields = ['confirmed_at']


class DrawPairInline(admin.TabularInline):
    model = DrawPair
    extra = 0
    fields = ['giver', 'receiver', 'created_at']
    readonly_fields = fields
    can_delete = False

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('giver', 'receiver')

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    inlines = [ParticipantInline, DrawPairInline]

    list_display = [
        'title',
        'organizer',
        'date',
        'value_range_display',
        'participant_stats_display',
        'draw_status_display',
        'created_at',
    ]
    list_filter = ['draw_performed', 'date', 'created_at']
    search_fields = ['title', 'description', 'organizer__email', 'participants__name']
    readonly_fields = ['event_uuid', 'draw_performed', 'draw_date', 'roster_version', 'created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {'fields': ('organizer', 'title', 'description', 'date')}),
        ('Gift Value', {'fields': ('min_value', 'max_value')}),
        ('Draw', {'fields': ('draw_performed', 'draw_date', 'roster_version')}),
        (
            'System Fields',
            {
                'fields': ('event_uuid', 'created_at', 'updated_at'),
                'classes': ('collapse',),
            },
        ),
    )

    def get_queryset(self, request):
        return (
            super()
            .get_queryset(request)
            .select_related('organizer')
            .annotate(
                participant_total=models.Count('participants', distinct=True),
                confirmed_total=models.Count(
                    'participants', filter=models.Q(participants__confirmed=True), distinct=True
                ),
            )
        )

    def value_range_display(self, obj):
        return f'R$ {obj.min_value} - R$ {obj.max_value}'

    value_range_display.short_description = 'Gift Value'

    def participant_stats_display(self, obj):
        color = 'green' if obj.participant_total and obj.confirmed_total == obj.participant_total else 'orange'
        return format_html(
            '<span style="color: {};">{} / {} confirmed</span>',
            color,
            obj.confirmed_total,
            obj.participant_total,
        )

    participant_stats_display.short_description = 'Participants'

    def draw_status_display(self, obj):
        if obj.draw_performed:
            return format_html('<span style="color: green;">Drawn {}</span>', obj.draw_date.strftime('%Y-%m-%d %H:%M'))
        return format_html('<span style="color: gray;">Pending</span>')

    draw_status_display.short_description = 'Draw'


@admin.register(Participant)
class ParticipantAdmin(admin.ModelAdmin):
    list_display = ['name', 'event_link', 'whatsapp_number', 'confirmed', 'confirmed_at']
    list_filter = ['confirmed', ('gift_suggestion', admin.EmptyFieldListFilter)]
    search_fields = ['name', 'whatsapp_number', 'event__title']
    readonly_fields = ['event_link', 'confirmed_at', 'created_at', 'updated_at']

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('event')

    def event_link(self, obj):
        return format_html(
            '<a href="/admin/events/event/{}/change/">{}</a>',
            obj.event.id,
            obj.event.title,
        )

    event_link.short_description = 'Event'
