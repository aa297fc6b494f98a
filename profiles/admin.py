from django.contrib import admin
from .models import TravelerProfile


@admin.register(TravelerProfile)
class TravelerProfileAdmin(admin.ModelAdmin):
    list_display = (
        'user', 'location', 'travel_style', 'verification_status', 'created_at'
    )
    list_filter = ('travel_style', 'verification_status')
    search_fields = ('user__username', 'user__email', 'location', 'bio')
    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        ('User', {
            'fields': ('user',)
        }),
        ('About', {
            'fields': ('bio', 'location')
        }),
        ('Travel Preferences', {
            'fields': ('travel_style', 'interests', 'languages')
        }),
        ('Verification', {
            'fields': ('verification_status',)
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
