from rest_framework import serializers

from .models import CoachFormation, Train


class TrainSerializer(serializers.ModelSerializer):
    class Meta:
        model = Train
        fields = ["id", "train_number"]
        read_only_fields = fields


class CoachFormationSerializer(serializers.ModelSerializer):
    class Meta:
        model = CoachFormation
        fields = [
            "id",
            "coach_number",
            "coach_class",
            "unit",
            "configuration",
            "capacity",
            "position",
        ]
        read_only_fields = fields
