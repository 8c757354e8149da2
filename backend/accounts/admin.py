from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser


class CustomUserAdmin(UserAdmin):
    model = CustomUser
    list_display = ['username', 'name', 'mobile_number', 'role', 'kyc_status', 'is_staff']
    list_filter = ['role', 'kyc_status', 'is_staff']
    search_fields = ['username', 'name', 'mobile_number', 'email']
    fieldsets = UserAdmin.fieldsets + (
        ('Platform', {'fields': ('name', 'mobile_number', 'role', 'kyc_status', 'state', 'district')}),
    )


admin.site.register(CustomUser, CustomUserAdmin)
