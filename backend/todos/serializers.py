# todos/serializers.py

from rest_framework import serializers
from .models import Todo


class TodoSerializer(serializers.ModelSerializer):
    class Meta:
        model = Todo
        # priority is written only by the prioritization pipeline
        fields = ['id', 'task', 'completed', 'priority', 'created_at', 'updated_at']
        read_only_fields = ['id', 'priority', 'created_at', 'updated_at']

    def create(self, validated_data):
        user = self.context['request'].user
        return Todo.objects.create(user=user, **validated_data)


class EmailTasksSerializer(serializers.Serializer):
    targetEmail = serializers.EmailField(
        required=True,
        allow_blank=False,
        error_messages={
            'required': "Target email is required.",
            'blank': "Target email is required.",
            'null': "Target email is required.",
        },
    )
