# backend/accounts/models.py

from django.contrib.auth.models import AbstractUser
from django.db import models

ADMIN_ROLES = ('admin', 'super_admin')
CUSTOMER_ROLES = ('farmer', 'trader', 'fpo', 'corporate', 'miller', 'financer')


class CustomUser(AbstractUser):
    ROLE_CHOICES = [
        ('admin', 'Admin'),
        ('super_admin', 'Super Admin'),
        ('farmer', 'Farmer'),
        ('trader', 'Trader'),
        ('fpo', 'FPO'),
        ('corporate', 'Corporate'),
        ('miller', 'Miller'),
        ('financer', 'Financer'),
    ]
    KYC_CHOICES = [
        ('not_started', 'Not started'),
        ('pending', 'Pending'),
        ('verified', 'Verified'),
        ('rejected', 'Rejected'),
    ]

    name = models.CharField(max_length=255, blank=True, default='')
    mobile_number = models.CharField(max_length=20, unique=True, blank=True, null=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default='farmer')
    kyc_status = models.CharField(max_length=20, choices=KYC_CHOICES, default='not_started')
    state = models.CharField(max_length=100, blank=True, default='')
    district = models.CharField(max_length=100, blank=True, default='')

    class Meta:
        ordering = ['name', 'username']

    @property
    def is_admin_role(self) -> bool:
        return self.role in ADMIN_ROLES

    @property
    def is_super_admin(self) -> bool:
        return self.role == 'super_admin'

    @property
    def is_customer(self) -> bool:
        return self.role in CUSTOMER_ROLES

    @property
    def is_kyc_verified(self) -> bool:
        return self.kyc_status == 'verified'

    @property
    def display_name(self) -> str:
        return self.name or self.get_full_name() or self.username

    def __str__(self):
        return f"{self.display_name} ({self.get_role_display()})"
