import django.db.models.deletion
from django.db import migrations, models


def _common_fields():
    return [
        ('is_active', models.BooleanField(default=True)),
        ('created_at', models.DateTimeField(auto_now_add=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Commodity',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('category', models.CharField(blank=True, default='', max_length=100)),
            ] + _common_fields(),
            options={
                'ordering': ['name'],
                'verbose_name_plural': 'commodities',
            },
        ),
        migrations.CreateModel(
            name='Variety',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('commodity_name', models.CharField(max_length=100)),
                ('variety_name', models.CharField(max_length=100)),
                ('description', models.TextField(blank=True, default='')),
            ] + _common_fields(),
            options={
                'ordering': ['commodity_name', 'variety_name'],
                'verbose_name_plural': 'varieties',
            },
        ),
        migrations.AddConstraint(
            model_name='variety',
            constraint=models.UniqueConstraint(fields=('commodity_name', 'variety_name'), name='uniq_variety_per_commodity'),
        ),
        migrations.CreateModel(
            name='Location',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
            ] + _common_fields(),
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('location', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='warehouses', to='masters.location')),
            ] + _common_fields(),
            options={
                'ordering': ['name'],
            },
        ),
        migrations.AddConstraint(
            model_name='warehouse',
            constraint=models.UniqueConstraint(fields=('location', 'name'), name='uniq_warehouse_per_location'),
        ),
    ]
