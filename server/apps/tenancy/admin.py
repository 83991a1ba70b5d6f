"""Django admin configuration for tenancy app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.tenancy.models import Member, Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin[Tenant]):
    """Admin interface for Tenant model."""

    list_display = ['id', 'name', 'created_at']
    search_fields = ['id', 'name']
    readonly_fields = ['created_at']


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin[Member]):
    """Admin interface for Member model."""

    list_display = ['user', 'tenant', 'display_name']
    list_filter = ['tenant']
    search_fields = ['user__email', 'display_name']

    def get_queryset(self, request: HttpRequest) -> QuerySet[Member]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user', 'tenant')
