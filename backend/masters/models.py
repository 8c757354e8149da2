from django.db import models


class Commodity(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True, default='')
    category = models.CharField(max_length=100, blank=True, default='')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name_plural = 'commodities'

    def __str__(self):
        return self.name


class Variety(models.Model):
    """A variety of a commodity. Both names are kept upper-case."""
    commodity_name = models.CharField(max_length=100)
    variety_name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default='')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['commodity_name', 'variety_name']
        verbose_name_plural = 'varieties'
        constraints = [
            models.UniqueConstraint(fields=['commodity_name', 'variety_name'], name='uniq_variety_per_commodity'),
        ]

    def save(self, *args, **kwargs):
        self.commodity_name = (self.commodity_name or '').strip().upper()
        self.variety_name = (self.variety_name or '').strip().upper()
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.commodity_name} / {self.variety_name}"


class Location(models.Model):
    name = models.CharField(max_length=255, unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name


class Warehouse(models.Model):
    location = models.ForeignKey(
        Location, on_delete=models.SET_NULL, blank=True, null=True, related_name='warehouses',
    )
    name = models.CharField(max_length=255)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(fields=['location', 'name'], name='uniq_warehouse_per_location'),
        ]

    def __str__(self):
        return self.name
