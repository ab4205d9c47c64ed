from django.contrib import admin

from .models import VerificationCode


@admin.register(VerificationCode)
class VerificationCodeAdmin(admin.ModelAdmin):
    list_display = ['identifier', 'channel', 'purpose', 'issued_at', 'expires_at', 'consumed', 'attempts']
    list_filter = ['channel', 'purpose', 'consumed']
    search_fields = ['identifier', 'subject']
    ordering = ['-issued_at']

    # Code hashes and CAS versions are never edited by hand
    readonly_fields = [field.name for field in VerificationCode._meta.fields]

    def has_add_permission(self, request):
        return False
