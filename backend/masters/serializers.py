from __future__ import annotations

from rest_framework import serializers

from .models import Commodity, Location, Variety, Warehouse


class CommoditySerializer(serializers.ModelSerializer):
    class Meta:
        model = Commodity
        fields = ['id', 'name', 'description', 'category', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ('created_at', 'updated_at')
        extra_kwargs = {'name': {'validators': []}}

    def validate_name(self, value: str) -> str:
        value = value.strip()
        clash = Commodity.objects.filter(name__iexact=value)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError('Commodity with this name already exists')
        return value


class VarietySerializer(serializers.ModelSerializer):
    class Meta:
        model = Variety
        fields = ['id', 'commodity_name', 'variety_name', 'description', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ('created_at', 'updated_at')
        validators = []

    def validate_commodity_name(self, value: str) -> str:
        return value.strip().upper()

    def validate_variety_name(self, value: str) -> str:
        return value.strip().upper()

    def validate(self, attrs):
        commodity = attrs.get('commodity_name', getattr(self.instance, 'commodity_name', None))
        variety = attrs.get('variety_name', getattr(self.instance, 'variety_name', None))
        clash = Variety.objects.filter(commodity_name=commodity, variety_name=variety)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError(
                {'variety_name': f'Variety {variety} already exists for {commodity}'}
            )
        return attrs


class LocationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = ['id', 'name', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ('created_at', 'updated_at')
        extra_kwargs = {'name': {'validators': []}}

    def validate_name(self, value: str) -> str:
        value = value.strip()
        clash = Location.objects.filter(name__iexact=value)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError('Location with this name already exists')
        return value


class WarehouseSerializer(serializers.ModelSerializer):
    location = serializers.SerializerMethodField()
    location_id = serializers.PrimaryKeyRelatedField(
        source='location', queryset=Location.objects.all(), required=False, allow_null=True, write_only=True,
    )

    class Meta:
        model = Warehouse
        fields = ['id', 'name', 'location', 'location_id', 'is_active', 'created_at', 'updated_at']
        read_only_fields = ('created_at', 'updated_at')
        validators = []

    def get_location(self, obj):
        if obj.location is None:
            return None
        return {'id': obj.location.id, 'name': obj.location.name}

    def validate_name(self, value: str) -> str:
        return value.strip()

    def validate(self, attrs):
        location = attrs.get('location', getattr(self.instance, 'location', None))
        name = attrs.get('name', getattr(self.instance, 'name', None))
        clash = Warehouse.objects.filter(location=location, name__iexact=name)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError({'name': 'Warehouse with this name already exists at this location'})
        return attrs
