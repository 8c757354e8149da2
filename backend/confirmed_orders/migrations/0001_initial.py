import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


def common_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('invoice_number', models.CharField(max_length=64, unique=True)),
        ('unique_id', models.CharField(blank=True, max_length=64, null=True, unique=True)),
        ('is_trashed', models.BooleanField(default=False)),
        ('transaction_date', models.DateField()),
        ('state', models.CharField(blank=True, default='', max_length=100)),
        ('location', models.CharField(blank=True, default='', max_length=255)),
        ('warehouse_name', models.CharField(blank=True, default='', max_length=255)),
        ('chamber_no', models.CharField(blank=True, default='', max_length=50)),
        ('commodity', models.CharField(max_length=100)),
        ('variety', models.CharField(blank=True, default='', max_length=100)),
        ('gate_pass_no', models.CharField(blank=True, default='', max_length=50)),
        ('vehicle_no', models.CharField(max_length=50)),
        ('weight_slip_no', models.CharField(blank=True, default='', max_length=50)),
        ('gross_weight_mt', models.DecimalField(decimal_places=4, default=0, max_digits=14)),
        ('tare_weight_mt', models.DecimalField(decimal_places=4, default=0, max_digits=14)),
        ('no_of_bags', models.PositiveIntegerField(default=0)),
        ('net_weight_mt', models.DecimalField(decimal_places=4, max_digits=14)),
        ('rate_per_mt', models.DecimalField(decimal_places=2, max_digits=14)),
        ('gross_amount', models.DecimalField(decimal_places=2, max_digits=16)),
        ('hlw_wheat', models.DecimalField(decimal_places=4, default=0, max_digits=10)),
        ('excess_hlw', models.DecimalField(decimal_places=4, default=0, max_digits=10)),
        ('deduction_amount_hlw', models.DecimalField(decimal_places=2, default=0, max_digits=14)),
        ('moisture_moi', models.DecimalField(decimal_places=4, default=0, max_digits=10)),
        ('excess_moisture', models.DecimalField(decimal_places=4, default=0, max_digits=10)),
        ('bdoi', models.DecimalField(decimal_places=4, default=0, max_digits=10)),
        ('excess_bdoi', models.DecimalField(decimal_places=4, default=0, max_digits=10)),
        ('moi_bdoi', models.DecimalField(decimal_places=4, default=0, max_digits=10)),
        ('weight_deduction_kg', models.DecimalField(decimal_places=3, default=0, max_digits=14)),
        ('deduction_amount_moi_bdoi', models.DecimalField(decimal_places=2, default=0, max_digits=14)),
        ('other_deductions', models.JSONField(blank=True, default=list)),
        ('total_deduction', models.DecimalField(decimal_places=2, default=0, max_digits=16)),
        ('net_amount', models.DecimalField(decimal_places=2, max_digits=16)),
        ('quality_report', models.JSONField(blank=True, default=dict)),
        ('delivery_location', models.CharField(blank=True, default='', max_length=255)),
        ('remarks', models.TextField(blank=True, default='')),
        ('created_at', models.DateTimeField(auto_now_add=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
        ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ConfirmedSalesOrder',
            fields=common_fields() + [
                ('seller_name', models.CharField(blank=True, default='', max_length=255)),
                ('approval_status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('declined', 'Declined')], default='pending', max_length=10)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('declined_reason', models.TextField(blank=True, default='')),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='confirmed_sales_orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['-updated_at'], name='confirmed_o_updated_5b7e2c_idx'),
                    models.Index(fields=['customer', 'approval_status'], name='confirmed_o_custome_a41d9e_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ConfirmedPurchaseOrder',
            fields=common_fields() + [
                ('supplier_name', models.CharField(blank=True, default='', max_length=255)),
                ('customer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='confirmed_purchase_orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at'],
                'abstract': False,
            },
        ),
    ]
