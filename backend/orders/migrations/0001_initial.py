import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

PAYMENT_TERMS = [('Advance', 'Advance'), ('T+3 Days', 'T+3 Days'), ('Against Delivery', 'Against Delivery')]
REQUEST_STATUS = [
    ('Open', 'Open'),
    ('In Negotiation', 'In Negotiation'),
    ('Confirmed', 'Confirmed'),
    ('Completed', 'Completed'),
    ('Cancelled', 'Cancelled'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('offers', '0001_initial'),
        ('logistics', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity_mt', models.DecimalField(decimal_places=3, max_digits=12)),
                ('final_price_per_quintal', models.DecimalField(decimal_places=2, max_digits=12)),
                ('status', models.CharField(choices=[('Pending Approval', 'Pending Approval'), ('Approved', 'Approved'), ('Approved - Awaiting Logistics', 'Approved - Awaiting Logistics'), ('Completed', 'Completed'), ('Rejected', 'Rejected')], default='Pending Approval', max_length=32)),
                ('deduction_amount', models.DecimalField(decimal_places=2, default=0, max_digits=14)),
                ('sauda_confirmation_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('buyer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='trade_orders', to=settings.AUTH_USER_MODEL)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('logistics_provider', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to='logistics.logisticsprovider')),
                ('offer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='offers.offer')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['status', '-created_at'], name='orders_orde_status_4e2a71_idx')],
            },
        ),
        migrations.CreateModel(
            name='PurchaseOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('commodity', models.CharField(max_length=100)),
                ('variety', models.CharField(blank=True, default='', max_length=100)),
                ('quantity_mt', models.DecimalField(decimal_places=3, max_digits=12)),
                ('expected_price_per_quintal', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('quality_requirements', models.JSONField(blank=True, default=dict)),
                ('delivery_location', models.CharField(max_length=255)),
                ('delivery_timeline_days', models.PositiveIntegerField(blank=True, null=True)),
                ('payment_terms', models.CharField(choices=PAYMENT_TERMS, default='Against Delivery', max_length=20)),
                ('status', models.CharField(choices=REQUEST_STATUS, default='Open', max_length=20)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('buyer', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='purchase_orders', to=settings.AUTH_USER_MODEL)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-updated_at'],
            },
        ),
        migrations.CreateModel(
            name='SaleOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('commodity', models.CharField(max_length=100)),
                ('variety', models.CharField(blank=True, default='', max_length=100)),
                ('quantity_mt', models.DecimalField(decimal_places=3, max_digits=12)),
                ('price_per_quintal', models.DecimalField(decimal_places=2, max_digits=12)),
                ('quality_report', models.JSONField(blank=True, default=dict)),
                ('delivery_location', models.CharField(max_length=255)),
                ('sauda_confirmation_date', models.DateField(blank=True, null=True)),
                ('delivery_timeline_days', models.PositiveIntegerField(blank=True, null=True)),
                ('payment_terms', models.CharField(choices=PAYMENT_TERMS, default='Against Delivery', max_length=20)),
                ('status', models.CharField(choices=REQUEST_STATUS, default='Open', max_length=20)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sale_orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-updated_at'],
                'indexes': [models.Index(fields=['-updated_at'], name='orders_sale_updated_8d0c4b_idx')],
            },
        ),
    ]
