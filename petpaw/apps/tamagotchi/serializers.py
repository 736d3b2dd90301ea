from rest_framework import serializers

from .models import Trophy, VirtualPet
from .services import ACTIONS, TROPHIES


class VirtualPetSerializer(serializers.ModelSerializer):
    mood = serializers.CharField(read_only=True)
    day_count = serializers.SerializerMethodField()
    type = serializers.CharField(source="pet_type", required=False)

    class Meta:
        model = VirtualPet
        fields = [
            "id",
            "user",
            "name",
            "type",
            "hunger",
            "happiness",
            "cleanliness",
            "energy",
            "level",
            "total_steps",
            "mood",
            "day_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "user", "level", "total_steps", "created_at", "updated_at"]

    def get_day_count(self, obj):
        return obj.day_count()


class TrophySerializer(serializers.ModelSerializer):
    icon = serializers.SerializerMethodField()

    class Meta:
        model = Trophy
        fields = ["id", "name", "category", "threshold", "icon", "unlocked_at"]

    def get_icon(self, obj):
        spec = TROPHIES.get(obj.name)
        return spec.icon if spec else None


class TrophyCreateSerializer(serializers.Serializer):
    name = serializers.ChoiceField(choices=sorted(TROPHIES))


class StepsSerializer(serializers.Serializer):
    steps = serializers.IntegerField(min_value=0)


class PetActionSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=sorted(ACTIONS))
