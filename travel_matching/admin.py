from django.contrib import admin
from .models import TravelMatch


@admin.register(TravelMatch)
class TravelMatchAdmin(admin.ModelAdmin):
    list_display = (
        'user_pair', 'score', 'compatibility_level', 'status', 'created_at', 'updated_at'
    )
    list_filter = ('status', 'created_at')
    search_fields = (
        'viewer__username', 'viewer__email',
        'candidate__username', 'candidate__email'
    )
    readonly_fields = ('id', 'score', 'shared_interests', 'created_at', 'updated_at')
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Users', {
            'fields': ('id', 'viewer', 'candidate')
        }),
        ('Compatibility', {
            'fields': ('score', 'shared_interests')
        }),
        ('Status', {
            'fields': ('status', 'created_at', 'updated_at')
        })
    )

    def user_pair(self, obj):
        return f"{obj.viewer.get_username()} → {obj.candidate.get_username()}"
    user_pair.short_description = 'User Pair'

    def compatibility_level(self, obj):
        return obj.to_record().compatibility_level
    compatibility_level.short_description = 'Level'

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('viewer', 'candidate')
