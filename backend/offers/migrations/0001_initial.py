import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Offer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('commodity', models.CharField(max_length=100)),
                ('variety', models.CharField(max_length=100)),
                ('quantity_mt', models.DecimalField(decimal_places=3, max_digits=12)),
                ('price_per_quintal', models.DecimalField(decimal_places=2, max_digits=12)),
                ('location', models.CharField(max_length=255)),
                ('quality_report', models.JSONField(blank=True, default=dict)),
                ('status', models.CharField(choices=[('Active', 'Active'), ('Sold', 'Sold'), ('Inactive', 'Inactive')], default='Active', max_length=20)),
                ('min_trade_quantity_mt', models.DecimalField(decimal_places=3, default=0, max_digits=12)),
                ('payment_terms', models.CharField(choices=[('Advance', 'Advance'), ('T+3 Days', 'T+3 Days'), ('Against Delivery', 'Against Delivery')], default='Against Delivery', max_length=20)),
                ('offer_validity_days', models.PositiveIntegerField(default=30)),
                ('delivery_location', models.CharField(max_length=255)),
                ('sauda_confirmation_date', models.DateField(blank=True, null=True)),
                ('logistics_option', models.CharField(choices=[('Seller Arranged', 'Seller Arranged'), ('Buyer Arranged', 'Buyer Arranged'), ('Platform Arranged', 'Platform Arranged')], default='Platform Arranged', max_length=20)),
                ('delivery_timeline_days', models.PositiveIntegerField(default=7)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('seller', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='offers', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', '-created_at'], name='offers_offe_status_6c1b2e_idx'),
                    models.Index(fields=['commodity'], name='offers_offe_commodi_9a7f3d_idx'),
                ],
            },
        ),
    ]
