from rest_framework import serializers

from .models import Listing


class ListingSerializer(serializers.ModelSerializer):
    landlord_id = serializers.UUIDField(read_only=True)
    landlord_username = serializers.ReadOnlyField(source="landlord.username")

    class Meta:
        model = Listing
        fields = [
            "id",
            "landlord_id",
            "landlord_username",
            "title",
            "description",
            "address",
            "rent_xlm",
            "bedrooms",
            "bathrooms",
            "furnished",
            "pet_friendly",
            "latitude",
            "longitude",
            "status",
            "view_count",
            "favorite_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
