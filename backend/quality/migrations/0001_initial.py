import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('orders', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='QualityParameter',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('commodity', models.CharField(max_length=100)),
                ('param_name', models.CharField(max_length=100)),
                ('unit', models.CharField(max_length=20)),
                ('standard', models.CharField(max_length=50)),
                ('remarks', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['commodity', 'param_name'],
                'indexes': [models.Index(fields=['commodity'], name='quality_qua_commodi_2f6a1d_idx')],
            },
        ),
        migrations.CreateModel(
            name='QualityDeduction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('measured_value', models.DecimalField(decimal_places=3, max_digits=12)),
                ('standard_value', models.DecimalField(decimal_places=3, max_digits=12)),
                ('deduction_percentage', models.DecimalField(decimal_places=4, max_digits=9)),
                ('deduction_amount', models.DecimalField(decimal_places=2, max_digits=14)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quality_deductions', to='orders.order')),
                ('parameter', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='deductions', to='quality.qualityparameter')),
            ],
            options={
                'ordering': ['order', 'parameter__param_name'],
            },
        ),
    ]
